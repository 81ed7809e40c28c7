"""Discord bot, cogs and adapters."""
