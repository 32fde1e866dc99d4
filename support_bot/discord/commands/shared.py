from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, Dict, Iterator, List, Optional, Protocol, runtime_checkable

import discord

from ..catalog import PRODUCTS, roles_for

if TYPE_CHECKING:
    from ...models import LinkedAccount, PurchaseFlags
    from ...services import GmodStoreClient, LinkClient

logger = logging.getLogger(__name__)

# NOTE:
# Handlers raise CommandError; the tree error hook logs and reports it.
# A handler sends at most one response, always ephemeral.

NOT_LINKED_ROLES = (
    "**You are not linked.** Linking your account at <https://leystryku.support/> "
    "is required before you can receive support roles."
)
USER_NOT_LINKED = "User is not linked."


class CommandError(RuntimeError):
    """A handler step failed. The message names the step."""


@runtime_checkable
class HasClients(Protocol):
    link: "LinkClient"
    store: "GmodStoreClient"


@contextmanager
def step(what: str) -> Iterator[None]:
    """
    Wrap one handler step so any failure surfaces as CommandError(what),
    chained to the original exception.
    """
    try:
        yield
    except CommandError:
        raise
    except Exception as exc:
        raise CommandError(what) from exc


async def reply(
    interaction: discord.Interaction,
    content: Optional[str] = None,
    *,
    embed: Optional[discord.Embed] = None,
) -> None:
    """Send the single ephemeral response for an interaction."""
    kwargs: Dict[str, Any] = {"ephemeral": True}
    if content is not None:
        kwargs["content"] = content
    if embed is not None:
        kwargs["embed"] = embed
    with step("Failed to send interaction response"):
        await interaction.response.send_message(**kwargs)


async def lookup_account(bot: HasClients, discord_id: int) -> Optional["LinkedAccount"]:
    with step(f"Failed to look up linked account for {discord_id}"):
        return await bot.link.lookup(discord_id)


async def fetch_purchases(bot: HasClients, account: "LinkedAccount") -> "PurchaseFlags":
    with step(f"Failed to fetch purchases for {account.uuid}"):
        return await bot.link.purchases(account)


_ROLE_NAMES = {p.role_id: p.flag for p in PRODUCTS}


async def assign_roles(member: discord.Member, flags: "PurchaseFlags", *, reason: str) -> List[int]:
    """
    Add one role per owned product. The first failure aborts the remaining
    assignments; roles already added stay added.
    """
    added: List[int] = []
    for role_id in roles_for(flags):
        with step(f"Failed to add {_ROLE_NAMES.get(role_id, role_id)} role"):
            await member.add_roles(discord.Object(id=role_id), reason=reason)
        added.append(role_id)

    logger.debug("Added %d product roles to member %s", len(added), member.id)
    return added


__all__ = [
    "NOT_LINKED_ROLES",
    "USER_NOT_LINKED",
    "CommandError",
    "HasClients",
    "step",
    "reply",
    "lookup_account",
    "fetch_purchases",
    "assign_roles",
]
