# getby/selectors/locator.py
from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Union

from playwright.sync_api import Frame, FrameLocator, Locator, Page

from getby.selectors.builder import LocatorUtils
from getby.selectors.context import SelectorContext
from getby.utils.logger import get_logger

if TYPE_CHECKING:
    from getby.core.query_loader import QueryBase

log = get_logger(__name__)

LocatorTarget = Union[Page, Frame, Locator, FrameLocator]


class PageLocators(LocatorUtils):
    """
    `get_by_*` lookups bound to a Playwright page, frame or locator.

    Selectors are compiled here and handed to `target.locator(...)`
    verbatim; Playwright does the querying.
    """

    def __init__(self, target: LocatorTarget, context: Optional[SelectorContext] = None) -> None:
        super().__init__(context)
        self.target = target

    def locator(self, selector: str) -> Locator:
        log.debug(f"locator({selector!r})")
        return self.target.locator(selector)


def resolve_locator(
    target: LocatorTarget,
    query: "QueryBase",
    context: Optional[SelectorContext] = None,
) -> Locator:
    """Convert a query model into a Playwright Locator under `target`."""
    locators = PageLocators(target, context)
    return locators.locator(query.compile(locators))
