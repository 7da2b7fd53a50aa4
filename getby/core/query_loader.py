# getby/core/query_loader.py
from __future__ import annotations

"""Query schema and loader
--------------------------
Pydantic models for the seven lookup kinds and a YAML loader for batches of
them (multi-document files supported). Each model compiles itself through a
SelectorBuilder, so a batch turns into one selector string per query.
"""

import os
import re
from enum import Enum
from pathlib import Path
from typing import Annotated, Literal, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from getby.selectors.builder import LocatorUtils, SelectorBuilder
from getby.selectors.context import SelectorContext
from getby.selectors.errors import QueryFileError
from getby.selectors.values import TextLiteral, TextPattern, TextValue


# ---------- Core enums ----------


class QueryKind(str, Enum):
    test_id = "test_id"
    alt_text = "alt_text"
    label = "label"
    placeholder = "placeholder"
    text = "text"
    title = "title"
    role = "role"


# ---------- Values ----------


class PatternSpec(BaseModel):
    model_config = ConfigDict(frozen=True)

    pattern: str = Field(..., description="Regex source, written as the engine reads it")
    flags: str = Field(default="")

    @field_validator("flags")
    @classmethod
    def _known_flags(cls, v: str) -> str:
        TextPattern("", v)  # raises on anything RegExp would reject
        return v

    def to_value(self) -> TextPattern:
        return TextPattern(source=self.pattern, flags=self.flags)


TextInput = Union[str, PatternSpec]


def _text_value(v: TextInput) -> TextValue:
    return v.to_value() if isinstance(v, PatternSpec) else TextLiteral(v)


# ---------- Query models (discriminated union by 'kind') ----------


class QueryBase(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    kind: QueryKind
    description: Optional[str] = Field(default=None, description="Human-friendly label")

    def compile(self, builder: LocatorUtils) -> str:
        raise NotImplementedError


class TextQueryBase(QueryBase):
    value: TextInput
    exact: bool = False


class ByTestIdQuery(QueryBase):
    kind: Literal["test_id"]
    value: TextInput

    def compile(self, builder: LocatorUtils) -> str:
        return builder.test_id_selector(_text_value(self.value))


class ByAltTextQuery(TextQueryBase):
    kind: Literal["alt_text"]

    def compile(self, builder: LocatorUtils) -> str:
        return builder.alt_text_selector(_text_value(self.value), exact=self.exact)


class ByLabelQuery(TextQueryBase):
    kind: Literal["label"]

    def compile(self, builder: LocatorUtils) -> str:
        return builder.label_selector(_text_value(self.value), exact=self.exact)


class ByPlaceholderQuery(TextQueryBase):
    kind: Literal["placeholder"]

    def compile(self, builder: LocatorUtils) -> str:
        return builder.placeholder_selector(_text_value(self.value), exact=self.exact)


class ByTextQuery(TextQueryBase):
    kind: Literal["text"]

    def compile(self, builder: LocatorUtils) -> str:
        return builder.text_selector(_text_value(self.value), exact=self.exact)


class ByTitleQuery(TextQueryBase):
    kind: Literal["title"]

    def compile(self, builder: LocatorUtils) -> str:
        return builder.title_selector(_text_value(self.value), exact=self.exact)


class ByRoleQuery(QueryBase):
    kind: Literal["role"]
    role: str
    checked: Optional[bool] = None
    disabled: Optional[bool] = None
    selected: Optional[bool] = None
    expanded: Optional[bool] = None
    include_hidden: Optional[bool] = Field(default=None, alias="includeHidden")
    level: Optional[int] = Field(default=None, ge=1)
    name: Optional[TextInput] = Field(default=None, description="Accessible name: substring text or a pattern")
    pressed: Optional[bool] = None

    @field_validator("role")
    @classmethod
    def _role_non_empty(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("role cannot be empty")
        return v

    def compile(self, builder: LocatorUtils) -> str:
        return builder.role_selector(
            self.role,
            checked=self.checked,
            disabled=self.disabled,
            selected=self.selected,
            expanded=self.expanded,
            includeHidden=self.include_hidden,
            level=self.level,
            name=_text_value(self.name) if self.name is not None else None,
            pressed=self.pressed,
        )


Query = Annotated[
    Union[
        ByTestIdQuery,
        ByAltTextQuery,
        ByLabelQuery,
        ByPlaceholderQuery,
        ByTextQuery,
        ByTitleQuery,
        ByRoleQuery,
    ],
    Field(discriminator="kind"),
]


# ---------- Batch model ----------


class QueryFile(BaseModel):
    version: str = Field(default="1")
    name: Optional[str] = None
    test_id_attribute: Optional[str] = Field(
        default=None, description="Overrides TEST_ID_ATTRIBUTE for this document only"
    )
    queries: list[Query] = Field(default_factory=list)

    @field_validator("test_id_attribute")
    @classmethod
    def _attr_non_empty(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("test_id_attribute cannot be empty")
        return v


# ---------- Compilation ----------


def compile_query(query: QueryBase, context: Optional[SelectorContext] = None) -> str:
    return query.compile(SelectorBuilder(context))


def compile_query_file(doc: QueryFile, context: Optional[SelectorContext] = None) -> list[str]:
    """Compile every query in `doc`, honoring its test_id_attribute override."""
    if doc.test_id_attribute:
        context = SelectorContext(test_id_attribute=doc.test_id_attribute)
    builder = SelectorBuilder(context)
    return [q.compile(builder) for q in doc.queries]


# ---------- Loading ----------

_ENV_REF = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*)\}")


def _subst_env(obj):
    if isinstance(obj, str):
        return _ENV_REF.sub(lambda m: os.environ.get(m.group(1), m.group(0)), obj)
    if isinstance(obj, list):
        return [_subst_env(x) for x in obj]
    if isinstance(obj, dict):
        return {k: _subst_env(v) for k, v in obj.items()}
    return obj


def _validation_message(header: str, ve: ValidationError) -> str:
    lines = [header]
    for e in ve.errors():
        loc = ".".join(str(p) for p in e.get("loc", []))
        msg = e.get("msg", "invalid value")
        lines.append(f"  - {loc}: {msg}")
    return "\n".join(lines)


def load_query_files(path: Path | str) -> list[QueryFile]:
    """Load one or more query batches from a YAML file (supports multi-document)."""
    qpath = Path(path)
    if not qpath.exists():
        raise FileNotFoundError(f"Query file not found: {qpath}")
    try:
        raw = qpath.read_text(encoding="utf-8")
    except UnicodeDecodeError as ue:
        raise QueryFileError(f"{qpath} is not valid UTF-8: {ue}") from ue
    except OSError as oe:
        raise QueryFileError(f"Cannot read {qpath}: {oe}") from oe
    try:
        docs = list(yaml.safe_load_all(raw))
    except yaml.YAMLError as ye:
        raise QueryFileError(f"YAML parse error in {qpath}: {ye}") from ye

    out: list[QueryFile] = []
    for idx, data in enumerate(docs, start=1):
        if data is None:
            continue
        if not isinstance(data, dict):
            raise QueryFileError(f"Document {idx} in {qpath} must be a mapping/object.")
        try:
            out.append(QueryFile.model_validate(_subst_env(data)))
        except ValidationError as ve:
            raise QueryFileError(_validation_message(f"Invalid query file '{qpath}' (document {idx}):", ve)) from ve
    if not out:
        raise QueryFileError(f"No query documents found in {qpath}")
    return out


__all__ = [
    "QueryKind",
    "PatternSpec",
    "Query",
    "QueryBase",
    "QueryFile",
    "ByTestIdQuery",
    "ByAltTextQuery",
    "ByLabelQuery",
    "ByPlaceholderQuery",
    "ByTextQuery",
    "ByTitleQuery",
    "ByRoleQuery",
    "compile_query",
    "compile_query_file",
    "load_query_files",
]
