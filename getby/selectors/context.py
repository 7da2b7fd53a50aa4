# getby/selectors/context.py
from __future__ import annotations

"""Selector context
-------------------
Holds the test-id attribute name that `get_by_test_id` matches against.

Convention: one writer, at startup (CLI, fixture or harness setup); any
number of readers afterwards. Builders read the attribute at call time, so
a change affects later lookups only; selectors already produced are plain
strings and never change.
"""

import functools
import threading
from dataclasses import dataclass, field
from typing import Optional

from playwright.sync_api import Selectors

from getby.utils.config import DEFAULT_TEST_ID_ATTRIBUTE, get_settings
from getby.utils.logger import get_logger

log = get_logger(__name__)


@dataclass
class SelectorContext:
    test_id_attribute: str = DEFAULT_TEST_ID_ATTRIBUTE
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def set_test_id_attribute(self, name: str) -> None:
        # No validation: the caller owns the attribute name.
        with self._lock:
            previous, self.test_id_attribute = self.test_id_attribute, name
        log.debug(f"test id attribute: {previous!r} -> {name!r}")


@functools.lru_cache(maxsize=1)
def default_context() -> SelectorContext:
    """Process-wide context, seeded from TEST_ID_ATTRIBUTE in settings."""
    return SelectorContext(test_id_attribute=get_settings().TEST_ID_ATTRIBUTE)


def apply_test_id_attribute(
    name: str,
    *,
    context: Optional[SelectorContext] = None,
    selectors: Optional[Selectors] = None,
) -> SelectorContext:
    """
    Point test-id lookups at `name`.

    When Playwright's `selectors` registry is given it is updated too, so
    locators created through Playwright's own get_by_test_id agree with ours.
    """
    ctx = context if context is not None else default_context()
    ctx.set_test_id_attribute(name)
    if selectors is not None:
        selectors.set_test_id_attribute(name)
    return ctx
