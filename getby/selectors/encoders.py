# getby/selectors/encoders.py
from __future__ import annotations

import re
from typing import Any, Callable, Mapping, Tuple

from getby.selectors.escaping import escape_for_attribute_selector_or_regex
from getby.selectors.values import TextLiteral, TextPattern, TextValue, as_text_value
from getby.utils.logger import get_logger

log = get_logger(__name__)


def attribute_selector(attr_name: str, value: TextValue, *, exact: bool = False) -> str:
    """`internal:attr=[name=value]` for a literal or pattern value."""
    return f"internal:attr=[{attr_name}={escape_for_attribute_selector_or_regex(value, exact)}]"


# ---------- role=... ----------

Transform = Callable[[Any], Tuple[str, str]]


def _stringify(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _plain(key: str) -> Transform:
    return lambda value: (key, _stringify(value))


def _include_hidden(value: Any) -> Tuple[str, str]:
    return "include-hidden", _stringify(value)


def _accessible_name(value: Any) -> Tuple[str, str]:
    # Literal names are a case-insensitive substring match; patterns pass through.
    if not isinstance(value, (str, re.Pattern, TextLiteral, TextPattern)):
        value = str(value)
    return "name", escape_for_attribute_selector_or_regex(as_text_value(value), exact=False)


# Emission order is part of the grammar; keep it.
ROLE_PROPERTIES: Tuple[Tuple[str, Transform], ...] = (
    ("checked", _plain("checked")),
    ("disabled", _plain("disabled")),
    ("selected", _plain("selected")),
    ("expanded", _plain("expanded")),
    ("includeHidden", _include_hidden),
    ("level", _plain("level")),
    ("name", _accessible_name),
    ("pressed", _plain("pressed")),
)

_KNOWN = {key for key, _ in ROLE_PROPERTIES}
_ALIASES = {"include_hidden": "includeHidden"}


def role_selector(role: str, options: Mapping[str, Any]) -> str:
    """
    `role=<role>` plus one `[key=value]` clause per recognized option,
    in ROLE_PROPERTIES order. Unknown keys are dropped.
    """
    opts = dict(options)
    for alias, key in _ALIASES.items():
        if alias in opts:
            value = opts.pop(alias)
            opts.setdefault(key, value)

    ignored = sorted(k for k in opts if k not in _KNOWN)
    if ignored:
        log.debug(f"role={role}: ignoring unsupported option(s) {ignored}")

    clauses = []
    for key, transform in ROLE_PROPERTIES:
        if key in opts:
            k, v = transform(opts[key])
            clauses.append(f"[{k}={v}]")
    return f"role={role}{''.join(clauses)}"
