from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import discord

from ..catalog import VERIFIED_ROLE_ID
from ..reporting import report_exception

if TYPE_CHECKING:
    from ..commands.shared import HasClients

logger = logging.getLogger(__name__)


async def member_create(bot: "HasClients", member: discord.Member) -> bool:
    """
    Grant the verified role to a joining member with a linked account.
    Returns whether the role was added. Errors propagate.
    """
    account = await bot.link.lookup(member.id)
    if account is None:
        return False

    await member.add_roles(discord.Object(id=VERIFIED_ROLE_ID), reason="support: linked account on join")
    logger.debug("Granted verified role to %s", member.id)
    return True


async def on_member_join(bot: "HasClients", member: discord.Member) -> None:
    """Event wrapper: never raises, logs and reports failures."""
    try:
        await member_create(bot, member)
    except Exception as exc:
        logger.exception("An error occurred whilst running member join hooks for %s", member.id)
        report_exception(exc)
