from __future__ import annotations

from typing import TYPE_CHECKING, Union

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
    step,
)

if TYPE_CHECKING:
    from ..bot import SupportBot

NAME = "force-roles"


async def _resolve_member(
    interaction: discord.Interaction,
    target: Union[discord.Member, discord.User],
) -> discord.Member:
    """
    The option usually resolves to a Member; fall back to fetching from the guild.
    """
    if isinstance(target, discord.Member):
        return target

    guild = interaction.guild
    if guild is None:
        raise CommandError("Failed to fetch guild id from command target")

    with step("Failed to fetch member from command target"):
        return await guild.fetch_member(target.id)


async def run(
    bot: HasClients,
    interaction: discord.Interaction,
    target: Union[discord.Member, discord.User],
) -> None:
    """Moderator variant of /roles for another member."""
    member = await _resolve_member(interaction, target)

    account = await lookup_account(bot, member.id)
    if account is None:
        await reply(interaction, NOT_LINKED_ROLES)
        return

    flags = await fetch_purchases(bot, account)
    await assign_roles(member, flags, reason=f"support:/force-roles by {interaction.user.id}")
    await reply(interaction, f"Successfully added roles to {member.mention}")


def register(bot: "SupportBot", tree: app_commands.CommandTree) -> None:
    @tree.command(name=NAME, description="Forcefully assign roles to a user")
    @app_commands.describe(member="User to force roles upon.")
    @app_commands.guild_only()
    @app_commands.default_permissions(moderate_members=True)
    async def force_roles(interaction: discord.Interaction, member: discord.Member) -> None:
        await run(bot, interaction, member)
