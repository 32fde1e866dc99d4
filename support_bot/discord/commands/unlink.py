from __future__ import annotations

from typing import TYPE_CHECKING

import discord
from discord import app_commands

from .shared import HasClients, reply, step

if TYPE_CHECKING:
    from ..bot import SupportBot

NAME = "unlink"


async def run(bot: HasClients, interaction: discord.Interaction, user: discord.User) -> None:
    with step(f"Failed to unlink {user.id}"):
        existed = await bot.link.unlink(user.id)

    content = f"Unlinked {user.mention}" if existed else f"{user.mention} is not linked."
    await reply(interaction, content)


def register(bot: "SupportBot", tree: app_commands.CommandTree) -> None:
    @tree.command(name=NAME, description="Unlink user account")
    @app_commands.describe(user="The user to unlink")
    @app_commands.guild_only()
    @app_commands.default_permissions(moderate_members=True)
    async def unlink(interaction: discord.Interaction, user: discord.User) -> None:
        await run(bot, interaction, user)
