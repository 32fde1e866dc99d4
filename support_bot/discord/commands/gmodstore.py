from __future__ import annotations

from typing import TYPE_CHECKING

import discord
from discord import app_commands

from .shared import USER_NOT_LINKED, HasClients, lookup_account, reply

if TYPE_CHECKING:
    from ..bot import SupportBot

NAME = "gmodstore"

PROFILE_URL = "https://www.gmodstore.com/users/{}"


async def run(bot: HasClients, interaction: discord.Interaction, user: discord.User) -> None:
    account = await lookup_account(bot, user.id)
    if account is None:
        content = USER_NOT_LINKED
    elif not account.gmod_store_id:
        content = "User does not have a registered GmodStore account."
    else:
        content = PROFILE_URL.format(account.gmod_store_id)

    await reply(interaction, content)


def register(bot: "SupportBot", tree: app_commands.CommandTree) -> None:
    @tree.command(name=NAME, description="Retrieve user GmodStore account page.")
    @app_commands.describe(user="User to fetch")
    @app_commands.guild_only()
    async def gmodstore(interaction: discord.Interaction, user: discord.User) -> None:
        await run(bot, interaction, user)
