"""Filter pipeline shared by the search() and list() implementations."""

from collections.abc import Iterable
from datetime import datetime, timezone

from archon.memory.base import MemoryEntry, MemorySearchOptions


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def matches_query(entry: MemoryEntry, query: str) -> bool:
    """Case-insensitive substring match against entry content."""
    return query.lower() in entry.content.lower()


def has_all_tags(entry: MemoryEntry, tags: Iterable[str]) -> bool:
    """True when the entry carries every tag in tags."""
    return all(tag in entry.tags for tag in tags)


def filter_entries(
    entries: Iterable[MemoryEntry],
    query: str | None = None,
    options: MemorySearchOptions | None = None,
) -> list[MemoryEntry]:
    """
    Apply content, tag and date filters, then sort newest first and limit.

    Args:
        entries: Candidate entries
        query: Substring to look for in content; None skips content matching
        options: Tag/date/limit constraints

    Returns:
        Matching entries, most recent first
    """
    options = options or MemorySearchOptions()
    results = list(entries)

    if query is not None:
        results = [e for e in results if matches_query(e, query)]

    if options.tags:
        results = [e for e in results if has_all_tags(e, options.tags)]

    if options.since is not None:
        since = _as_utc(options.since)
        results = [e for e in results if e.timestamp >= since]
    if options.until is not None:
        until = _as_utc(options.until)
        results = [e for e in results if e.timestamp <= until]

    results.sort(key=lambda e: e.timestamp, reverse=True)

    if options.limit and options.limit > 0:
        results = results[: options.limit]

    return results
