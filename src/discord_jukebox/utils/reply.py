"""Utility functions for formatting Discord messages."""

from __future__ import annotations

from functools import cache


@cache
def format_duration(seconds: int | float | None) -> str:
    if seconds is None:
        return "–"

    total_seconds = int(seconds)
    hours = total_seconds // 3600
    minutes = (total_seconds % 3600) // 60
    secs = total_seconds % 60

    if hours > 0:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"


@cache
def truncate(text: str, max_length: int = 90) -> str:
    if len(text) <= max_length:
        return text
    return text[: max_length - 1] + "…"


def code_table(rows: list[tuple[str, str]], *, header: tuple[str, str] = ("#", "Name")) -> str:
    """Render two-column rows as a fenced block, e.g. a numbered queue listing."""
    width = max([len(header[0]), *(len(left) for left, _ in rows)])
    lines = [f"{header[0]:<{width}} | {header[1]}"]
    lines.extend(f"{left:<{width}} | {right}" for left, right in rows)
    body = "\n".join(lines)
    return f"```go\n{body}\n```"
