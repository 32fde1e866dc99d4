from __future__ import annotations

import logging

import discord
from discord import app_commands

from ..config.settings import settings
from ..services import GmodStoreClient, LinkClient
from .commands import register_all, on_command_error
from .events import on_member_join
from .reporting import init_error_tracking

logger = logging.getLogger(__name__)


class SupportBot(discord.Client):
    """
    Discord support bot.

    Notes:
    - discord.Client uses its own internal HTTP client for Discord.
    - self.link / self.store are the REST clients for the link service and
      GmodStore; built once before startup and never replaced.
    - Commands raise; the tree error hook logs and reports.
    """

    def __init__(self, link: LinkClient, store: GmodStoreClient) -> None:
        intents = discord.Intents.default()
        # Needed for on_member_join (verified role)
        intents.members = True

        super().__init__(intents=intents)

        self.link = link
        self.store = store
        self.tree = app_commands.CommandTree(self)
        self.tree.error(on_command_error)

    async def setup_hook(self) -> None:
        register_all(self, self.tree)

        # Sync commands (guild-only when DISCORD_GUILD_ID is set)
        try:
            guild_id = settings.discord_guild_id
            if guild_id:
                guild = discord.Object(id=guild_id)
                self.tree.copy_global_to(guild=guild)
                synced = await self.tree.sync(guild=guild)
                logger.info("Slash commands synced to guild=%s (%d commands)", guild_id, len(synced))
            else:
                synced = await self.tree.sync()
                logger.info("Slash commands synced globally (%d commands)", len(synced))
            for cmd in synced:
                logger.debug("Registered command: %s", cmd.name)
        except discord.HTTPException:
            logger.exception("Slash command sync failed")

    async def close(self) -> None:
        # Close REST clients first
        for client in (self.link, self.store):
            try:
                await client.aclose()
            except Exception:
                logger.exception("Failed to close %s", type(client).__name__)
        await super().close()

    async def on_ready(self) -> None:
        logger.info(
            "SupportBot ready as %s (guild_sync=%s, link_api=%s)",
            str(self.user),
            str(settings.discord_guild_id or "global"),
            self.link.base_url,
        )

    async def on_member_join(self, member: discord.Member) -> None:
        await on_member_join(self, member)


# ---------------------------------------------------------------------
# Entrypoint
# ---------------------------------------------------------------------


def build_bot() -> SupportBot:
    return SupportBot(
        link=LinkClient.from_settings(settings),
        store=GmodStoreClient.from_settings(settings),
    )


def run_bot() -> None:
    logging.basicConfig(
        level=getattr(logging, str(settings.log_level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    settings.validate_startup()
    init_error_tracking(settings)

    bot = build_bot()
    # log_handler=None: keep the root logging config above
    bot.run(settings.discord_token, log_handler=None)


if __name__ == "__main__":
    run_bot()
