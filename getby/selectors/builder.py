# getby/selectors/builder.py
from __future__ import annotations

from re import Pattern
from typing import Any, Optional, Union

from getby.selectors.context import SelectorContext, default_context
from getby.selectors.encoders import attribute_selector, role_selector
from getby.selectors.escaping import escape_for_text_selector
from getby.selectors.values import TextLiteral, TextPattern, as_text_value

TextInput = Union[str, Pattern, TextLiteral, TextPattern]


class LocatorUtils:
    """
    `get_by_*` lookups compiled to selector strings.

    Subclasses implement `locator(selector)`; whatever it returns is what
    every `get_by_*` call returns.
    """

    def __init__(self, context: Optional[SelectorContext] = None) -> None:
        self._context = context

    @property
    def context(self) -> SelectorContext:
        return self._context if self._context is not None else default_context()

    def locator(self, selector: str) -> Any:
        raise NotImplementedError

    # ---------- Lookups ----------

    def get_by_test_id(self, test_id: TextInput) -> Any:
        return self.locator(self.test_id_selector(test_id))

    def get_by_alt_text(self, text: TextInput, *, exact: bool = False) -> Any:
        return self.locator(self.alt_text_selector(text, exact=exact))

    def get_by_label(self, text: TextInput, *, exact: bool = False) -> Any:
        return self.locator(self.label_selector(text, exact=exact))

    def get_by_placeholder(self, text: TextInput, *, exact: bool = False) -> Any:
        return self.locator(self.placeholder_selector(text, exact=exact))

    def get_by_text(self, text: TextInput, *, exact: bool = False) -> Any:
        return self.locator(self.text_selector(text, exact=exact))

    def get_by_title(self, text: TextInput, *, exact: bool = False) -> Any:
        return self.locator(self.title_selector(text, exact=exact))

    def get_by_role(self, role: str, **options: Any) -> Any:
        return self.locator(self.role_selector(role, **options))

    # ---------- Selector strings ----------

    def test_id_selector(self, test_id: TextInput) -> str:
        attr = self.context.test_id_attribute
        return attribute_selector(attr, as_text_value(test_id), exact=True)

    def alt_text_selector(self, text: TextInput, *, exact: bool = False) -> str:
        return attribute_selector("alt", as_text_value(text), exact=exact)

    def title_selector(self, text: TextInput, *, exact: bool = False) -> str:
        return attribute_selector("title", as_text_value(text), exact=exact)

    def placeholder_selector(self, text: TextInput, *, exact: bool = False) -> str:
        return attribute_selector("placeholder", as_text_value(text), exact=exact)

    def label_selector(self, text: TextInput, *, exact: bool = False) -> str:
        return "internal:label=" + escape_for_text_selector(as_text_value(text), exact)

    def text_selector(self, text: TextInput, *, exact: bool = False) -> str:
        return "text=" + escape_for_text_selector(as_text_value(text), exact)

    def role_selector(self, role: str, **options: Any) -> str:
        return role_selector(role, {k: v for k, v in options.items() if v is not None})


class SelectorBuilder(LocatorUtils):
    """LocatorUtils whose 'locator' is the selector string itself."""

    def locator(self, selector: str) -> str:
        return selector
