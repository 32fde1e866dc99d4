from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Union

import discord
from discord import app_commands

from ..catalog import PRODUCTS, flag_glyph
from .shared import HasClients, fetch_purchases, lookup_account, reply

if TYPE_CHECKING:
    from ...models import PurchaseFlags
    from ..bot import SupportBot

NAME = "purchases"

EMBED_COLOUR = 0xBF8AE0


def purchases_lines(flags: "PurchaseFlags") -> str:
    return "\n".join(f"{flag_glyph(getattr(flags, p.flag))} | {p.label}" for p in PRODUCTS)


def build_embed(
    user: Union[discord.User, discord.Member],
    flags: Optional["PurchaseFlags"],
) -> discord.Embed:
    """
    Purchases embed for a user. flags=None renders the "not linked" variant.
    """
    if flags is None:
        embed = discord.Embed(
            title="User is not linked",
            description="The user is not linked or has no valid GmodStore account.",
            colour=discord.Colour(EMBED_COLOUR),
        )
    else:
        embed = discord.Embed(
            title="User Purchases",
            description=purchases_lines(flags),
            colour=discord.Colour(EMBED_COLOUR),
        )

    embed.set_author(name=str(user), icon_url=user.display_avatar.url)
    return embed


async def run(bot: HasClients, interaction: discord.Interaction, user: discord.User) -> None:
    account = await lookup_account(bot, user.id)
    flags = await fetch_purchases(bot, account) if account is not None else None
    await reply(interaction, embed=build_embed(user, flags))


def register(bot: "SupportBot", tree: app_commands.CommandTree) -> None:
    @tree.command(name=NAME, description="Retrieve user's GmodStore purchases.")
    @app_commands.describe(user="User to fetch purchases for.")
    @app_commands.guild_only()
    @app_commands.default_permissions(moderate_members=True)
    async def purchases(interaction: discord.Interaction, user: discord.User) -> None:
        await run(bot, interaction, user)
