# getby/selectors/values.py
from __future__ import annotations

"""Text values
--------------
Every text-bearing lookup takes either literal text or a pattern. The two
shapes are kept apart as an explicit union so the escapers never have to
sniff the input, and patterns are rendered as `/source/flags` literals the
way the query engine (a JavaScript RegExp) reports them.
"""

import re
from dataclasses import dataclass
from re import Pattern
from typing import Union

from getby.selectors.errors import UnsupportedPatternFlag

# Python flag -> JavaScript flag, in the order RegExp.prototype.flags uses.
_FLAG_LETTERS = (
    (re.IGNORECASE, "i"),
    (re.MULTILINE, "m"),
    (re.DOTALL, "s"),
)
_JS_FLAG_ORDER = "dgimsuvy"
_TRANSLATABLE = re.IGNORECASE | re.MULTILINE | re.DOTALL | re.UNICODE


@dataclass(frozen=True)
class TextLiteral:
    text: str


@dataclass(frozen=True)
class TextPattern:
    source: str
    flags: str = ""

    def __post_init__(self) -> None:
        bad = [f for f in self.flags if f not in _JS_FLAG_ORDER]
        if bad:
            raise UnsupportedPatternFlag(f"unknown regex flag(s) {''.join(bad)!r} in {self.flags!r}")
        if len(set(self.flags)) != len(self.flags):
            raise UnsupportedPatternFlag(f"duplicate regex flag in {self.flags!r}")

    @classmethod
    def from_re(cls, pattern: Pattern) -> "TextPattern":
        if not isinstance(pattern.pattern, str):
            raise UnsupportedPatternFlag("bytes patterns cannot be used as selector text")
        extra = pattern.flags & ~_TRANSLATABLE
        if extra:
            raise UnsupportedPatternFlag(
                f"{re.RegexFlag(extra)!r} has no regex-literal equivalent; "
                "only IGNORECASE, MULTILINE and DOTALL are supported"
            )
        flags = "".join(letter for flag, letter in _FLAG_LETTERS if pattern.flags & flag)
        return cls(source=pattern.pattern, flags=flags)

    def literal(self) -> str:
        return f"/{self.source}/{self.flags}"


TextValue = Union[TextLiteral, TextPattern]


def as_text_value(value: Union[str, Pattern, TextLiteral, TextPattern]) -> TextValue:
    """Normalize a caller-supplied value into the literal/pattern union."""
    if isinstance(value, (TextLiteral, TextPattern)):
        return value
    if isinstance(value, re.Pattern):
        return TextPattern.from_re(value)
    if isinstance(value, str):
        return TextLiteral(value)
    raise TypeError(f"expected str or compiled pattern, got {type(value).__name__}")


def regex_literal(value: Union[Pattern, TextPattern]) -> str:
    """Render a pattern as `/source/flags`; the source is used verbatim."""
    pattern = value if isinstance(value, TextPattern) else TextPattern.from_re(value)
    return pattern.literal()
