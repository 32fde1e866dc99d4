from __future__ import annotations

import logging
from typing import TYPE_CHECKING
from uuid import uuid4

import discord
from discord import app_commands

from ...models import COUPON_TTL_DAYS, CouponBuilder
from ..catalog import LSAC_PRODUCT_ID
from .shared import HasClients, fetch_purchases, lookup_account, reply, step

if TYPE_CHECKING:
    from ..bot import SupportBot

logger = logging.getLogger(__name__)

NAME = "coupon"

COUPON_PERCENT = 25
COUPON_MAX_USES = 1


def new_coupon_code() -> str:
    # 32 hex chars; random enough that collisions across the process are not a concern
    return uuid4().hex


async def run(bot: HasClients, interaction: discord.Interaction) -> None:
    """
    Self-service LSAC coupon for SwiftAC owners.

    Order of checks: linked -> already owns LSAC -> owns SwiftAC ->
    existing active coupon -> create a new one.
    """
    account = await lookup_account(bot, interaction.user.id)
    if account is None:
        await reply(interaction, "You are not linked")
        return

    flags = await fetch_purchases(bot, account)
    if flags.lsac:
        await reply(interaction, "You already own LSAC!")
        return
    if not flags.swift_ac:
        await reply(interaction, "You must own SwiftAC to get coupon for LSAC!")
        return

    with step("Failed to fetch existing coupons"):
        existing = await bot.store.active_coupon(account, LSAC_PRODUCT_ID)
    if existing is not None:
        await reply(interaction, f"You already have a valid coupon code, use code `{existing.code}`")
        return

    with step("Failed to build coupon"):
        builder = CouponBuilder(
            code=new_coupon_code(),
            percent=COUPON_PERCENT,
            max_uses=COUPON_MAX_USES,
            bound_user_id=account.gmod_store_id,
        )

    with step("Failed to create coupon"):
        coupon = await bot.store.create_coupon(LSAC_PRODUCT_ID, builder)

    logger.debug("Issued coupon %s to discord user %s", coupon.id, interaction.user.id)
    await reply(interaction, f"Use code: `{coupon.code}`, it expires in {COUPON_TTL_DAYS} days.")


def register(bot: "SupportBot", tree: app_commands.CommandTree) -> None:
    @tree.command(name=NAME, description="Generate a coupon for LSAC.")
    @app_commands.guild_only()
    async def coupon(interaction: discord.Interaction) -> None:
        await run(bot, interaction)
