from __future__ import annotations

import importlib
import logging
from typing import TYPE_CHECKING, Dict, List, Mapping, Optional

from discord import app_commands

from ..reporting import report_exception
from .shared import CommandError

if TYPE_CHECKING:
    import discord

logger = logging.getLogger(__name__)

# Single static table: slash command name -> command module.
# Every module exposes NAME, run(...) and register(bot, tree).
#
# Rules:
# - Deterministic ordering (registration + logs)
# - Fail-closed: every module is required
# - The tree must end up with exactly these names (checked in register_all)
COMMANDS: Mapping[str, str] = {
    "coupon": "coupon",
    "force-roles": "force_roles",
    "gmodstore": "gmodstore",
    "purchases": "purchases",
    "roles": "roles",
    "steam": "steam",
    "unlink": "unlink",
}

__all__ = ["COMMANDS", "CommandError", "register_all", "on_command_error"]


def register_all(bot: "discord.Client", tree: app_commands.CommandTree) -> None:
    """
    Register every command module with the shared CommandTree, then verify the
    tree matches COMMANDS so registration and dispatch cannot drift apart.
    """
    pkg = __name__
    results: Dict[str, str] = {}

    for name, module_name in COMMANDS.items():
        mod = importlib.import_module(f"{pkg}.{module_name}")
        if getattr(mod, "NAME", None) != name:
            raise RuntimeError(f"command module {module_name} declares NAME={getattr(mod, 'NAME', None)!r}, expected {name!r}")
        mod.register(bot, tree)
        results[name] = "registered"

    registered = {c.name for c in tree.get_commands()}
    expected = set(COMMANDS)
    if registered != expected:
        missing = sorted(expected - registered)
        extra = sorted(registered - expected)
        msg = f"command tree drift: missing={missing} unexpected={extra}"
        logger.error(msg)
        raise RuntimeError(msg)

    summary = ", ".join(f"{k}={v}" for k, v in results.items())
    logger.info("discord commands registration summary: %s", summary)


def _command_name(interaction: "discord.Interaction") -> Optional[str]:
    cmd = interaction.command
    if cmd is not None:
        return cmd.name
    data = interaction.data or {}
    return data.get("name")


def _step_chain(error: BaseException) -> List[str]:
    """Messages from a CommandError down through its causes."""
    out: List[str] = []
    cur: Optional[BaseException] = error
    while cur is not None and len(out) < 8:
        out.append(f"{type(cur).__name__}: {cur}")
        cur = cur.__cause__
    return out


async def on_command_error(interaction: "discord.Interaction", error: app_commands.AppCommandError) -> None:
    """
    Tree-level error hook.

    - Unknown command names are logged and ignored (no reply).
    - Anything else is logged with its step chain and reported.
    Errors are never re-surfaced to the user beyond what the handler already sent.
    """
    if isinstance(error, app_commands.CommandNotFound):
        logger.error("Unknown command: %s", error.name)
        return

    original = error.original if isinstance(error, app_commands.CommandInvokeError) else error
    name = _command_name(interaction) or "unknown"

    logger.error(
        "An error occurred whilst running /%s (user=%s): %s",
        name,
        getattr(interaction.user, "id", None),
        " <- ".join(_step_chain(original)),
        exc_info=original,
    )
    report_exception(original)
