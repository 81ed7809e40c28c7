"""Command-boundary error reporting shared by the cogs."""

from __future__ import annotations

import logging

import discord
from discord.ext import commands

from discord_jukebox.domain.shared.exceptions import (
    PersistenceError,
    ResolutionError,
    TransportError,
    UserInputError,
)
from discord_jukebox.domain.shared.messages import DiscordUIMessages, LogTemplates

logger = logging.getLogger(__name__)


def describe_error(error: BaseException) -> str:
    """Map a failure to the short text shown in the channel."""
    if isinstance(error, UserInputError):
        return error.message
    if isinstance(error, ResolutionError):
        return DiscordUIMessages.ERROR_RESOLUTION.format(cause=error.cause or error.message)
    if isinstance(error, TransportError):
        return DiscordUIMessages.ERROR_COULD_NOT_JOIN_VOICE
    if isinstance(error, PersistenceError):
        return DiscordUIMessages.ERROR_STORAGE
    if isinstance(error, commands.NoPrivateMessage):
        return DiscordUIMessages.ERROR_SERVER_ONLY
    if isinstance(error, commands.UserInputError):
        return str(error)
    return DiscordUIMessages.ERROR_COMMAND_FAILED


async def report_command_error(ctx: commands.Context, error: commands.CommandError) -> None:
    """Log *error* at the level its kind deserves and reply once."""
    original = getattr(error, "original", error)
    name = ctx.command.qualified_name if ctx.command else "<unknown>"

    if isinstance(original, (UserInputError, commands.UserInputError, commands.CheckFailure)):
        logger.debug(LogTemplates.COMMAND_USER_ERROR, name, original)
    elif isinstance(original, (ResolutionError, TransportError)):
        logger.warning(LogTemplates.COMMAND_USER_ERROR, name, original)
    elif isinstance(original, PersistenceError):
        logger.error(LogTemplates.COMMAND_USER_ERROR, name, original)
    else:
        logger.error(LogTemplates.COMMAND_FAILED, name, exc_info=original)

    try:
        await ctx.send(describe_error(original))
    except discord.HTTPException:
        logger.warning(LogTemplates.COMMAND_REPLY_FAILED, name)
