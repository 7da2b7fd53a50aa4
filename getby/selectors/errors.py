# getby/selectors/errors.py
from __future__ import annotations


class SelectorError(ValueError):
    pass


class UnsupportedPatternFlag(SelectorError):
    """A pattern flag has no equivalent in the query engine's regex literal."""


class QueryFileError(SelectorError):
    pass
