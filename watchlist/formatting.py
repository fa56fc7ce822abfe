"""
Author: Ashwin Nair
Date: 2025-08-22
Project name: formatting.py
Summary: Transport-neutral replies for the chat layer.
"""

from dataclasses import dataclass, field
from typing import Optional

VIEW_COLOR = 0x00ff99
# Discord rejects embeds with more than 25 fields.
MAX_FIELDS = 25


@dataclass
class Field:
    name: str
    value: str
    inline: bool = False


@dataclass
class Reply:
    """What the bot says back: plain text, or an embed-like card."""

    text: str = ""
    title: Optional[str] = None
    fields: list = field(default_factory=list)
    thumbnail: Optional[str] = None
    color: Optional[int] = None

    @property
    def is_card(self) -> bool:
        return self.title is not None


def entry_line(entry) -> str:
    """Short form used in confirmations: title (category)."""
    return f"{entry.title} ({entry.category})"


def entry_field(entry) -> Field:
    status = "✅ watched" if entry.done else "⏳ to watch"
    details = [status]
    if entry.rating:
        details.append(f"⭐ {entry.rating}")
    details.append(f"added {entry.created_at:%Y-%m-%d}")
    value = " · ".join(details)
    if entry.link:
        value += f"\n{entry.link}"
    return Field(name=entry_line(entry), value=value)


def watchlist_text(display_name, entries) -> str:
    """Plain-text rendering, one line per entry under an underlined heading."""
    heading = f"Watchlist for {display_name}:"
    lines = [heading, "-" * len(heading)]
    for i, entry in enumerate(entries, start=1):
        mark = "x" if entry.done else " "
        line = f"  {i}. [{mark}] {entry_line(entry)}"
        if entry.rating:
            line += f" ⭐{entry.rating}"
        lines.append(line)
    return "\n".join(lines)


def watchlist_reply(display_name, entries, avatar_url=None, note="") -> Reply:
    """A card with one field per entry, or plain text when it would not fit."""
    if len(entries) > MAX_FIELDS:
        body = watchlist_text(display_name, entries)
        return Reply(text=f"{note}\n{body}" if note else body)
    return Reply(
        text=note,
        title=f"📺 {display_name}'s Watchlist",
        fields=[entry_field(e) for e in entries],
        thumbnail=avatar_url,
        color=VIEW_COLOR,
    )
