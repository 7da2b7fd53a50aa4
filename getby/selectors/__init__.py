# getby/selectors/__init__.py
"""
Selectors package
-----------------
Compiles get_by_* lookups (test id, alt text, label, placeholder, text,
title, role) into Playwright selector strings, and binds them to pages.
"""

from .builder import LocatorUtils, SelectorBuilder
from .context import SelectorContext, apply_test_id_attribute, default_context
from .errors import QueryFileError, SelectorError, UnsupportedPatternFlag
from .locator import PageLocators, resolve_locator
from .values import TextLiteral, TextPattern, as_text_value, regex_literal

__all__ = [
    "LocatorUtils",
    "SelectorBuilder",
    "SelectorContext",
    "apply_test_id_attribute",
    "default_context",
    "PageLocators",
    "resolve_locator",
    "TextLiteral",
    "TextPattern",
    "as_text_value",
    "regex_literal",
    "SelectorError",
    "UnsupportedPatternFlag",
    "QueryFileError",
]
