from __future__ import annotations

from typing import TYPE_CHECKING

import discord
from discord import app_commands

from .shared import (
    NOT_LINKED_ROLES,
    CommandError,
    HasClients,
    assign_roles,
    fetch_purchases,
    lookup_account,
    reply,
)

if TYPE_CHECKING:
    from ..bot import SupportBot

NAME = "roles"


async def run(bot: HasClients, interaction: discord.Interaction) -> None:
    """Grant the invoking member one role per purchased product."""
    member = interaction.user
    if not isinstance(member, discord.Member):
        raise CommandError("Failed to get member from command")

    account = await lookup_account(bot, member.id)
    if account is None:
        await reply(interaction, NOT_LINKED_ROLES)
        return

    flags = await fetch_purchases(bot, account)
    await assign_roles(member, flags, reason="support:/roles")
    await reply(interaction, "Your roles have been assigned")


def register(bot: "SupportBot", tree: app_commands.CommandTree) -> None:
    @tree.command(name=NAME, description="Get access to the support channels")
    @app_commands.guild_only()
    async def roles(interaction: discord.Interaction) -> None:
        await run(bot, interaction)
