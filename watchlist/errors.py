"""
Author: Ashwin Nair
Date: 2025-08-22
Project name: errors.py
Summary: Error variants raised by the model, store and parser layers.
"""


class WatchlistError(Exception):
    """Base class for every watchlist failure."""


# --- Validation ---
class ValidationError(WatchlistError):
    pass


class InvalidOwnerError(ValidationError):
    def __init__(self, owner):
        self.owner = owner
        super().__init__(f"invalid user ID: {owner!r}")


class InvalidTitleError(ValidationError):
    def __init__(self, title):
        self.title = title
        super().__init__(f"invalid title: {title!r}")


class InvalidCategoryError(ValidationError):
    def __init__(self, category):
        self.category = category
        super().__init__(f"invalid category option: {category!r}")


class InvalidTimestampError(ValidationError):
    def __init__(self, value):
        self.value = value
        super().__init__(f"invalid timestamp: {value!r}")


class InvalidRatingError(ValidationError):
    def __init__(self, value, minimum=None, maximum=None):
        self.value = value
        self.minimum = minimum
        self.maximum = maximum
        super().__init__(f"invalid rating: {value!r}")


# --- Lookup ---
class NotFoundError(WatchlistError):
    def __init__(self, owner, title, category=None):
        self.owner = owner
        self.title = title
        self.category = category
        super().__init__(f"no entry {title!r} ({category or 'any category'}) for {owner}")


class AmbiguousEntryError(WatchlistError):
    """Raised when a title without a category matches entries in several categories."""

    def __init__(self, owner, title, categories):
        self.owner = owner
        self.title = title
        self.categories = list(categories)
        super().__init__(f"{title!r} matches several categories for {owner}: {self.categories}")


class DuplicateKeyError(WatchlistError):
    def __init__(self, owner, title, category):
        self.owner = owner
        self.title = title
        self.category = category
        super().__init__(f"entry {title!r} ({category}) already exists for {owner}")


class NothingToChooseError(WatchlistError):
    def __init__(self, owner):
        self.owner = owner
        super().__init__(f"no unwatched entries for {owner}")


# --- Parsing ---
class ArgumentCountError(WatchlistError):
    def __init__(self, command, required, given):
        self.command = command
        self.required = required
        self.given = given
        super().__init__(f"not enough arguments: {command} needs {required}, got {given}")


# --- Storage ---
class StoreError(WatchlistError):
    """The backing store failed; the command is abandoned."""


class StoreTimeoutError(StoreError):
    """Stopped waiting on the store. The call may still complete in the background."""

    def __init__(self, operation, timeout):
        self.operation = operation
        self.timeout = timeout
        super().__init__(f"{operation} timed out after {timeout}s")
