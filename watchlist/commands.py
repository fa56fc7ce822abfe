"""
Author: Ashwin Nair
Date: 2025-08-22
Project name: commands.py
Summary: Parses chat commands and runs them against the watchlist.
"""

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from watchlist.entry import Category, RatingRule, parse_rating
from watchlist.errors import (
    AmbiguousEntryError,
    ArgumentCountError,
    DuplicateKeyError,
    InvalidCategoryError,
    InvalidOwnerError,
    InvalidRatingError,
    InvalidTitleError,
    NotFoundError,
    NothingToChooseError,
    StoreError,
    StoreTimeoutError,
    ValidationError,
    WatchlistError,
)
from watchlist.formatting import Reply, entry_line, watchlist_reply
from watchlist.service import WatchlistService
from watchlist.sorting import sort_entries
from watchlist.tokenizer import is_addressed, tokenize

logger = logging.getLogger(__name__)

DEFAULT_PREFIX = "./watchlist"


class CommandKind(str, Enum):
    ADD = "add"
    DELETE = "delete"
    VIEW = "view"
    UPDATE = "update"
    DONE = "done"
    RATE = "rate"
    RANDOM = "random"
    HELP = "help"
    CONTACT = "contact"


# Syntax and description for every command, in help order.
USAGE = {
    CommandKind.ADD: ("add <title> <category> <link?>", "Add a movie, show or anime to your list"),
    CommandKind.DELETE: ("delete <title> <category?>", "Remove a title from your list"),
    CommandKind.VIEW: ("view <title|date|category|watched|rating?>", "Show your list, sorted (default: watched)"),
    CommandKind.UPDATE: ("update <title> <category?> <link>", "Change the link of a title"),
    CommandKind.DONE: ("done <title> <category?>", "Mark a title as watched"),
    CommandKind.RATE: ("rate <title> <category?> <rating>", "Rate a title"),
    CommandKind.RANDOM: ("random", "Pick something you haven't watched yet"),
    CommandKind.HELP: ("help <command?>", "Show this help menu"),
    CommandKind.CONTACT: ("contact", "Where to report bugs and ideas"),
}

# Fewest tokens (prefix and keyword included) each command accepts.
MIN_TOKENS = {
    CommandKind.ADD: 4,
    CommandKind.DELETE: 3,
    CommandKind.UPDATE: 4,
    CommandKind.DONE: 3,
    CommandKind.RATE: 4,
}


def usage(kind, prefix=DEFAULT_PREFIX):
    syntax, description = USAGE[kind]
    return f"`{prefix} {syntax}` — {description}"


def full_usage(prefix=DEFAULT_PREFIX):
    lines = ["📖 **Watchlist Bot Commands**"]
    lines.extend(usage(kind, prefix) for kind in CommandKind)
    return "\n".join(lines)


@dataclass
class IncomingMessage:
    """A chat message as handed over by the transport."""
    author_id: str
    author_name: str
    text: str
    channel_id: Optional[str] = None
    avatar_url: Optional[str] = None


# --- Commands ---
@dataclass
class AddCommand:
    title: str
    category: str
    link: str = ""


@dataclass
class DeleteCommand:
    title: str
    category: Optional[str] = None


@dataclass
class ViewCommand:
    sort_key: Optional[str] = None


@dataclass
class UpdateCommand:
    title: str
    category: Optional[str]
    link: str


@dataclass
class DoneCommand:
    title: str
    category: Optional[str] = None


@dataclass
class RateCommand:
    title: str
    category: Optional[str]
    rating: int


@dataclass
class RandomCommand:
    pass


@dataclass
class HelpCommand:
    topic: Optional[str] = None


@dataclass
class ContactCommand:
    pass


MUTATING_COMMANDS = (AddCommand, DeleteCommand, UpdateCommand, DoneCommand, RateCommand)


def _arg(tokens, index):
    return tokens[index] if len(tokens) > index else None


def parse_command(tokens, rating_rule=None):
    """Build a command from tokens that already start with the prefix.

    Unknown keywords become a help request. Raises ArgumentCountError when a
    command is too short and InvalidRatingError for a non-numeric rating.
    """
    try:
        kind = CommandKind(tokens[1].lower())
    except ValueError:
        return HelpCommand()

    required = MIN_TOKENS.get(kind, 2)
    if len(tokens) < required:
        raise ArgumentCountError(kind.value, required - 2, len(tokens) - 2)

    if kind is CommandKind.ADD:
        return AddCommand(tokens[2], tokens[3], _arg(tokens, 4) or "")
    if kind is CommandKind.DELETE:
        return DeleteCommand(tokens[2], _arg(tokens, 3))
    if kind is CommandKind.VIEW:
        return ViewCommand(_arg(tokens, 2))
    # update/rate: four tokens mean no category, five or more carry one.
    if kind is CommandKind.UPDATE:
        if len(tokens) == 4:
            return UpdateCommand(tokens[2], None, tokens[3])
        return UpdateCommand(tokens[2], tokens[3], tokens[4])
    if kind is CommandKind.DONE:
        return DoneCommand(tokens[2], _arg(tokens, 3))
    if kind is CommandKind.RATE:
        if len(tokens) == 4:
            return RateCommand(tokens[2], None, parse_rating(tokens[3], rating_rule))
        return RateCommand(tokens[2], tokens[3], parse_rating(tokens[4], rating_rule))
    if kind is CommandKind.RANDOM:
        return RandomCommand()
    if kind is CommandKind.HELP:
        return HelpCommand(_arg(tokens, 2))
    if kind is CommandKind.CONTACT:
        return ContactCommand()
    raise AssertionError(f"Unhandled command kind {kind}")


class Dispatcher:
    """Turns one chat message into at most one reply.

    Returns None for messages not addressed to the bot. Everything else,
    failures included, gets a reply.
    """

    def __init__(
        self,
        service: WatchlistService,
        prefix: str = DEFAULT_PREFIX,
        contact_url: str = "",
        timeout: float = 5.0,
        rating_rule: Optional[RatingRule] = None,
    ) -> None:
        self.service = service
        self.prefix = prefix
        self.contact_url = contact_url
        self.timeout = timeout
        self.rating_rule = rating_rule or service.rating_rule

    async def handle(self, message: IncomingMessage) -> Optional[Reply]:
        tokens = tokenize(message.text)
        if not is_addressed(tokens, self.prefix):
            return None
        if len(tokens) < 2:
            return Reply(full_usage(self.prefix))

        logger.debug("Command from %s: %s", message.author_id, tokens[1:])
        command = None
        try:
            command = parse_command(tokens, self.rating_rule)
            return await self.execute(command, message)
        except StoreTimeoutError as e:
            logger.error("Gave up waiting on the store for %r from %s: %s", message.text, message.author_id, e)
            if isinstance(command, MUTATING_COMMANDS):
                return Reply(f"⏳ The database is slow right now, your change may still go through. "
                             f"Check with `{self.prefix} view` before trying again.")
            return Reply("⏳ The database is slow right now, please try again later.")
        except StoreError:
            logger.exception("Store failure while handling %r from %s", message.text, message.author_id)
            return Reply("⚠️ Something went wrong with the database, please try again later.")
        except WatchlistError as e:
            logger.warning("Command %r from %s failed: %s", tokens[1], message.author_id, e)
            return Reply(self.describe_error(e))

    async def _call(self, fn, *args):
        """Run a blocking store call in a worker thread, bounded by the timeout."""
        try:
            return await asyncio.wait_for(asyncio.to_thread(fn, *args), timeout=self.timeout)
        except asyncio.TimeoutError:
            raise StoreTimeoutError(fn.__name__, self.timeout) from None

    async def execute(self, command, message: IncomingMessage) -> Reply:
        owner = message.author_id

        if isinstance(command, AddCommand):
            entry = await self._call(self.service.add, owner, command.title, command.category, command.link)
            return Reply(f"✅ Added {entry_line(entry)} to your watchlist!")

        if isinstance(command, DeleteCommand):
            entry = await self._call(self.service.delete, owner, command.title, command.category)
            return Reply(f"🗑️ Removed {entry_line(entry)} from your watchlist.")

        if isinstance(command, ViewCommand):
            entries = await self._call(self.service.fetch, owner, True)
            if not entries:
                return Reply(f"📭 Your watchlist is empty. Try `{self.prefix} add <title> <category>`.")
            result = sort_entries(entries, command.sort_key)
            note = ""
            if result.rejected_key:
                note = f"⚠️ invalid sorting option: {result.rejected_key}, showing unsorted."
            return watchlist_reply(message.author_name, result.entries, message.avatar_url, note)

        if isinstance(command, UpdateCommand):
            entry = await self._call(self.service.update, owner, command.title, command.category, command.link)
            return Reply(f"🔗 Link for {entry_line(entry)} updated.")

        if isinstance(command, DoneCommand):
            entry = await self._call(self.service.mark_done, owner, command.title, command.category)
            return Reply(f"🎬 Marked {entry_line(entry)} as watched.")

        if isinstance(command, RateCommand):
            entry = await self._call(self.service.rate, owner, command.title, command.category, command.rating)
            return Reply(f"⭐ You rated {entry_line(entry)} a {entry.rating}!")

        if isinstance(command, RandomCommand):
            entry = await self._call(self.service.pick_random, owner)
            text = f"🎲 How about {entry_line(entry)}?"
            if entry.link:
                text += f"\n{entry.link}"
            return Reply(text)

        if isinstance(command, HelpCommand):
            return Reply(self.help_text(command.topic))

        if isinstance(command, ContactCommand):
            return Reply(f"📬 Bugs and ideas: {self.contact_url}")

        raise TypeError(f"Unhandled command {command!r}")

    def help_text(self, topic=None) -> str:
        """Usage for one command, or for all of them when the topic is unknown."""
        try:
            return usage(CommandKind((topic or "").lower()), self.prefix)
        except ValueError:
            return full_usage(self.prefix)

    def describe_error(self, error: WatchlistError) -> str:
        """The user-facing text for a failed command."""
        if isinstance(error, ArgumentCountError):
            return f"❌ Not enough arguments.\n{usage(CommandKind(error.command), self.prefix)}"
        if isinstance(error, InvalidRatingError):
            return f"❌ Invalid rating `{error.value}`, use {self.rating_rule.describe()}."
        if isinstance(error, InvalidCategoryError):
            options = ", ".join(c.value for c in Category)
            return f"❌ `{error.category}` is not a category. Use one of: {options}."
        if isinstance(error, InvalidTitleError):
            return "❌ The title can't be empty."
        if isinstance(error, InvalidOwnerError):
            return "❌ Couldn't tell who sent that command."
        if isinstance(error, ValidationError):
            return f"❌ That entry isn't valid: {error}."
        if isinstance(error, DuplicateKeyError):
            return f"⚠️ {error.title} ({error.category}) is already on your watchlist."
        if isinstance(error, NotFoundError):
            if error.category:
                return f"❌ {error.title} ({error.category}) isn't on your watchlist."
            return f"❌ {error.title} isn't on your watchlist."
        if isinstance(error, AmbiguousEntryError):
            categories = ", ".join(error.categories)
            return (f"❓ {error.title} is on your watchlist more than once ({categories}). "
                    f"Add the category to pick one.")
        if isinstance(error, NothingToChooseError):
            return "🎲 Nothing to choose from, everything on your watchlist is watched."
        return "⚠️ That didn't work, please try again."
