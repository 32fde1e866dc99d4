"""
Leystryku support bot.

Bridges Discord slash commands with the account link service and the
GmodStore coupon API.
"""

__version__ = "1.0.0"
