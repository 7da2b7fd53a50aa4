from pathlib import Path
import textwrap

import pytest

from getby.core.query_loader import compile_query_file, load_query_files
from getby.selectors.context import SelectorContext
from getby.selectors.errors import QueryFileError


def write_yaml(tmp_path: Path, body: str, name: str = "queries.yaml") -> Path:
    p = tmp_path / name
    p.write_text(textwrap.dedent(body), encoding="utf-8")
    return p


def test_load_query_files_multiple_docs(tmp_path: Path, monkeypatch):
    monkeypatch.setenv("SEARCH_ID", "q")
    f = write_yaml(
        tmp_path,
        """
        version: "1"
        name: login
        queries:
          - kind: test_id
            value: submit
          - kind: text
            value: 'He said "hi"'
          - kind: label
            value: Email
            exact: true
          - kind: role
            role: button
            name: Sign in
            includeHidden: true
        ---
        name: search
        test_id_attribute: data-qa
        queries:
          - kind: test_id
            value: "${SEARCH_ID}"
          - kind: placeholder
            value:
              pattern: "^Search"
              flags: i
        """,
    )

    docs = load_query_files(f)
    assert [d.name for d in docs] == ["login", "search"]

    assert compile_query_file(docs[0], SelectorContext()) == [
        'internal:attr=[data-testid="submit"]',
        r'text=/He\s+said\s+"hi"/i',
        'internal:label="Email"',
        'role=button[include-hidden=true][name="Sign in"i]',
    ]
    assert compile_query_file(docs[1], SelectorContext()) == [
        'internal:attr=[data-qa="q"]',
        "internal:attr=[placeholder=/^Search/i]",
    ]


def test_unknown_kind_is_reported(tmp_path: Path):
    f = write_yaml(
        tmp_path,
        """
        queries:
          - kind: xpath
            value: //div
        """,
    )
    with pytest.raises(QueryFileError, match="document 1"):
        load_query_files(f)


def test_bad_pattern_flags_are_reported(tmp_path: Path):
    f = write_yaml(
        tmp_path,
        """
        queries:
          - kind: text
            value: {pattern: "a", flags: "x"}
        """,
    )
    with pytest.raises(QueryFileError):
        load_query_files(f)


def test_non_mapping_document(tmp_path: Path):
    f = write_yaml(tmp_path, "- just\n- a list\n")
    with pytest.raises(QueryFileError, match="mapping"):
        load_query_files(f)


def test_empty_file(tmp_path: Path):
    f = write_yaml(tmp_path, "")
    with pytest.raises(QueryFileError, match="No query documents"):
        load_query_files(f)


def test_missing_file(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        load_query_files(tmp_path / "nope.yaml")


def test_role_name_pattern(tmp_path: Path):
    f = write_yaml(
        tmp_path,
        """
        queries:
          - kind: role
            role: button
            name: {pattern: "^Sub", flags: i}
        """,
    )
    (doc,) = load_query_files(f)
    assert compile_query_file(doc, SelectorContext()) == ["role=button[name=/^Sub/i]"]


def test_invalid_utf8_is_reported(tmp_path: Path):
    f = tmp_path / "latin1.yaml"
    f.write_bytes(b"queries:\n  - kind: text\n    value: caf\xe9\n")
    with pytest.raises(QueryFileError, match="not valid UTF-8"):
        load_query_files(f)
