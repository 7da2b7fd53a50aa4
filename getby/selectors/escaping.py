# getby/selectors/escaping.py
from __future__ import annotations

import re

from getby.selectors.values import TextPattern, TextValue

_REGEX_SPECIAL = re.compile(r"[.*+?^>${}()|\[\]\\]")
_WHITESPACE_RUN = re.compile(r"[ \t\r\n\f\v]+")


def escape_for_regex(text: str) -> str:
    return _REGEX_SPECIAL.sub(lambda m: "\\" + m.group(0), text)


def _quote(text: str) -> str:
    return '"' + text.replace('"', '\\"') + '"'


def escape_for_text_selector(value: TextValue, exact: bool) -> str:
    """
    Body of a `text=` / `internal:label=` selector.

    - pattern              → /source/flags (exact is ignored)
    - exact                → "quoted", inner quotes backslashed
    - quote, `>>` or leading `/` → case-insensitive regex, whitespace runs as \\s+
    - anything else        → the text itself
    """
    if isinstance(value, TextPattern):
        return value.literal()

    text = value.text
    if exact:
        return _quote(text)

    # The engine would otherwise misparse these.
    if '"' in text or ">>" in text or text.startswith("/"):
        body = _WHITESPACE_RUN.sub(lambda _: r"\s+", escape_for_regex(text))
        return f"/{body}/i"

    return text


def escape_for_attribute_selector(text: str, exact: bool) -> str:
    # Quotes only; backslashes pass through as-is.
    quoted = _quote(text)
    return quoted if exact else quoted + "i"


def escape_for_attribute_selector_or_regex(value: TextValue, exact: bool) -> str:
    if isinstance(value, TextPattern):
        return value.literal()
    return escape_for_attribute_selector(value.text, exact)


__all__ = [
    "escape_for_regex",
    "escape_for_text_selector",
    "escape_for_attribute_selector",
    "escape_for_attribute_selector_or_regex",
]
