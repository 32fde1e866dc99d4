"""
Support bot launcher.

Loads settings, starts the Discord client and blocks until it disconnects.
Any startup failure (bad environment, rejected token) is logged, followed by
a short checklist of the usual causes, and the process exits with status 1.
"""

import logging
import sys

HINTS = (
    "DISCORD_TOKEN missing or not loaded into the environment",
    "API_ENDPOINT missing, not http(s), or ending with '/'",
    "API_TOKEN or GMS_PAT missing",
    "DISCORD_GUILD_ID set to something other than a positive integer",
)


def _report_startup_failure() -> None:
    logging.basicConfig(level=logging.ERROR)
    logging.exception("Support bot failed to start.")
    print("\n❌ Support bot failed to start. Most common causes:")
    for hint in HINTS:
        print(f"   - {hint}")
    print()


def main() -> None:
    try:
        # Imported here: settings are read from the environment on import.
        from support_bot.discord.bot import run_bot

        run_bot()
    except Exception:
        _report_startup_failure()
        sys.exit(1)


if __name__ == "__main__":
    main()
