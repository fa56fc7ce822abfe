"""
Author: Ashwin Nair
Date: 2025-08-22
Project name: bot.py
Summary: Discord front end for the watchlist bot.
"""

import logging

import discord
from discord.ext import commands

from watchlist.commands import Dispatcher, IncomingMessage
from watchlist.config import get_settings
from watchlist.service import WatchlistService
from watchlist.store import SqliteEntryStore

log = logging.getLogger("watchlist.bot")


# Utility: reply -> discord.send() arguments
def render(reply):
    """Turn a Reply into keyword arguments for Messageable.send()."""
    if not reply.is_card:
        return {"content": reply.text}

    embed = discord.Embed(title=reply.title, color=reply.color)
    for field in reply.fields:
        embed.add_field(name=field.name, value=field.value, inline=field.inline)
    if reply.thumbnail:
        embed.set_thumbnail(url=reply.thumbnail)
    return {"content": reply.text or None, "embed": embed}


def to_incoming(message):
    """Extract what the dispatcher needs from a discord.Message."""
    return IncomingMessage(
        author_id=str(message.author.id),
        author_name=message.author.display_name,
        text=message.content,
        channel_id=str(message.channel.id),
        avatar_url=str(message.author.display_avatar.url),
    )


def build_bot(dispatcher):
    # Discord bot setup
    intents = discord.Intents.default()
    intents.message_content = True
    bot = commands.Bot(command_prefix=dispatcher.prefix, intents=intents, help_command=None)

    # --- Events ---
    @bot.event
    async def on_ready():
        log.info("Logged in as %s", bot.user)

    @bot.event
    async def on_message(message):
        if message.author.bot:
            return

        reply = await dispatcher.handle(to_incoming(message))
        if reply is not None:
            await message.channel.send(**render(reply))

    return bot


def main():
    settings = get_settings()
    if not settings.discord_token:
        raise SystemExit("DISCORD_BOT_TOKEN is not set")

    # SQLite connection
    store = SqliteEntryStore(settings.storage.database, timeout=settings.storage.timeout)
    service = WatchlistService(store, rating_rule=settings.rating_rule)
    dispatcher = Dispatcher(
        service,
        prefix=settings.bot.prefix,
        contact_url=settings.bot.contact_url,
        timeout=settings.storage.timeout,
    )

    bot = build_bot(dispatcher)
    try:
        # Run bot
        bot.run(settings.discord_token, log_level=logging.getLevelName(settings.bot.log_level))
    finally:
        store.close()


if __name__ == "__main__":
    main()
