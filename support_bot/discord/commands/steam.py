from __future__ import annotations

from typing import TYPE_CHECKING

import discord
from discord import app_commands

from .shared import USER_NOT_LINKED, HasClients, lookup_account, reply

if TYPE_CHECKING:
    from ..bot import SupportBot

NAME = "steam"

PROFILE_URL = "https://steamcommunity.com/profiles/{}"


async def run(bot: HasClients, interaction: discord.Interaction, user: discord.User) -> None:
    account = await lookup_account(bot, user.id)
    content = USER_NOT_LINKED if account is None else PROFILE_URL.format(account.steam_id)
    await reply(interaction, content)


def register(bot: "SupportBot", tree: app_commands.CommandTree) -> None:
    @tree.command(name=NAME, description="Retrieve user Steam account page.")
    @app_commands.describe(user="User to fetch")
    @app_commands.guild_only()
    async def steam(interaction: discord.Interaction, user: discord.User) -> None:
        await run(bot, interaction, user)
