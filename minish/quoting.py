"""Helpers for reasoning about single and double quotes in shell text."""

from __future__ import annotations

QUOTE_CHARS = ("'", '"')


def is_fully_quoted(text: str) -> bool:
    """Return True if text starts and ends with the same quote character."""
    if not text:
        return False
    return text[0] in QUOTE_CHARS and text[-1] == text[0]


def has_open_quote(text: str | None) -> bool:
    """Return True if text leaves a single or double quote unclosed."""
    in_single = False
    in_double = False
    for char in text or "":
        if char == "'" and not in_double:
            in_single = not in_single
        if char == '"' and not in_single:
            in_double = not in_double
    return in_single or in_double


def remove_quotes(text: str | None) -> str | None:
    """Return text with all quoting characters removed.

    A quote opens a quoted span; inside it the other quote character is kept
    literally, and the same character closes the span.
    """
    if text is None:
        return None
    kept = []
    quote = ""
    for char in text:
        if char in QUOTE_CHARS and not quote:
            quote = char
        elif quote and char == quote:
            quote = ""
        else:
            kept.append(char)
    return "".join(kept)


def contains_unquoted(text: str | None, symbol: str) -> bool:
    """Return True if symbol occurs in text outside any quoted span."""
    if not text:
        return False
    in_single = False
    in_double = False
    for char in text:
        if char == "'" and not in_double:
            in_single = not in_single
        elif char == '"' and not in_single:
            in_double = not in_double
        elif char == symbol and not in_single and not in_double:
            return True
    return False


def is_quoted_at(text: str | None, index: int) -> bool:
    """Return True if the character at index lies inside quotes."""
    in_single = False
    in_double = False
    for position, char in enumerate(text or ""):
        if position == index:
            break
        if char == "'" and not in_double:
            in_single = not in_single
        elif char == '"' and not in_single:
            in_double = not in_double
    return in_single or in_double


def unmatched_quote(text: str | None, limit: int | None = None) -> str:
    """Return the quote character left open within the first limit characters.

    An empty string means every quote is closed.
    """
    if not text:
        return ""
    segment = text if limit is None else text[:max(limit, 0)]
    open_quote = ""
    for char in segment:
        if char in QUOTE_CHARS:
            if not open_quote:
                open_quote = char
            elif open_quote == char:
                open_quote = ""
    return open_quote