"""
Discord integration package.

Design goals:
- Keep support_bot.discord.bot as the stable entrypoint (SupportBot + run_bot).
- One module per slash command under support_bot.discord.commands.
"""

from .bot import SupportBot, build_bot, run_bot  # re-export for convenience

__all__ = [
    "SupportBot",
    "build_bot",
    "run_bot",
]
