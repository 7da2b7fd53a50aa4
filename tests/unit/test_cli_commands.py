import json
from pathlib import Path
import textwrap

from click.testing import CliRunner

from getby.cli import cli
from getby.utils.config import get_settings


def write_multi_doc_yaml(tmp_path: Path) -> Path:
    y = textwrap.dedent(
        """
        name: alpha
        test_id_attribute: data-qa
        queries:
          - kind: test_id
            value: save
          - kind: alt_text
            value: Logo
        ---
        name: beta
        queries:
          - kind: role
            role: heading
            level: 2
        """
    )
    p = tmp_path / "demo.yaml"
    p.write_text(y, encoding="utf-8")
    return p


def test_cli_text_command():
    result = CliRunner().invoke(cli, ["text", 'He said "hi"'])
    assert result.exit_code == 0
    assert result.output.strip() == r'text=/He\s+said\s+"hi"/i'


def test_cli_label_exact():
    result = CliRunner().invoke(cli, ["label", "Email", "--exact"])
    assert result.exit_code == 0
    assert result.output.strip() == 'internal:label="Email"'


def test_cli_placeholder_regex():
    result = CliRunner().invoke(cli, ["placeholder", "^Sea", "--regex", "--flags", "i"])
    assert result.exit_code == 0
    assert result.output.strip() == "internal:attr=[placeholder=/^Sea/i]"


def test_cli_flags_need_regex():
    result = CliRunner().invoke(cli, ["text", "x", "--flags", "i"])
    assert result.exit_code == 2


def test_cli_bad_flags():
    result = CliRunner().invoke(cli, ["title", "x", "--regex", "--flags", "z"])
    assert result.exit_code == 2


def test_cli_test_id_attribute_override():
    result = CliRunner().invoke(cli, ["test-id", "save-btn", "--attribute", "data-qa"])
    assert result.exit_code == 0
    assert result.output.strip() == 'internal:attr=[data-qa="save-btn"]'


def test_cli_role_only_emits_given_options():
    result = CliRunner().invoke(cli, ["role", "button", "--checked", "--name", "Submit"])
    assert result.exit_code == 0
    assert result.output.strip() == 'role=button[checked=true][name="Submit"i]'

    result = CliRunner().invoke(cli, ["role", "row", "--no-include-hidden"])
    assert result.output.strip() == "role=row[include-hidden=false]"


def test_cli_compile_multi_doc(tmp_path: Path):
    wf = write_multi_doc_yaml(tmp_path)
    result = CliRunner().invoke(cli, ["compile", str(wf)])
    assert result.exit_code == 0
    assert result.output.splitlines() == [
        'internal:attr=[data-qa="save"]',
        'internal:attr=[alt="Logo"i]',
        "role=heading[level=2]",
    ]


def test_cli_compile_json(tmp_path: Path):
    write_multi_doc_yaml(tmp_path)
    result = CliRunner().invoke(cli, ["compile", "--dir", str(tmp_path), "--no-recursive", "--json"])
    assert result.exit_code == 0
    data = json.loads(result.output)
    assert [r["kind"] for r in data["selectors"]] == ["test_id", "alt_text", "role"]
    assert data["selectors"][2]["document"] == "beta"


def test_cli_validate_with_dir(tmp_path: Path):
    write_multi_doc_yaml(tmp_path)
    (tmp_path / "broken.yml").write_text("queries:\n  - kind: nope\n", encoding="utf-8")
    result = CliRunner().invoke(cli, ["validate", "--dir", str(tmp_path), "--no-recursive"])
    assert result.exit_code == 1
    assert result.output.count("OK  ") == 2
    assert "ERR " in result.output


def test_cli_config_shows_test_id_attribute():
    result = CliRunner().invoke(cli, ["config"])
    assert result.exit_code == 0
    assert "TEST_ID_ATTRIBUTE" in json.loads(result.output)


def test_cli_compile_continues_past_unreadable_file(tmp_path: Path):
    bad = tmp_path / "bad.yaml"
    bad.write_bytes(b"\xff\xfe not utf-8")
    good = tmp_path / "good.yaml"
    good.write_text("queries:\n  - kind: text\n    value: ok\n", encoding="utf-8")
    result = CliRunner().invoke(cli, ["compile", str(bad), str(good)])
    assert result.exit_code == 1
    assert "text=ok" in result.output
    assert "ERR " in result.output


def test_cli_compile_defaults_to_queries_dir(tmp_path: Path, monkeypatch):
    write_multi_doc_yaml(tmp_path)
    monkeypatch.setenv("QUERIES_DIR", str(tmp_path))
    get_settings.cache_clear()
    try:
        result = CliRunner().invoke(cli, ["compile"])
        assert result.exit_code == 0
        assert "role=heading[level=2]" in result.output.splitlines()

        result = CliRunner().invoke(cli, ["validate"])
        assert result.exit_code == 0
        assert result.output.count("OK  ") == 2
    finally:
        get_settings.cache_clear()


def test_cli_compile_with_empty_queries_dir(tmp_path: Path, monkeypatch):
    monkeypatch.setenv("QUERIES_DIR", str(tmp_path / "missing"))
    get_settings.cache_clear()
    try:
        result = CliRunner().invoke(cli, ["compile"])
        assert result.exit_code == 2
        assert "Nothing to compile" in result.output
    finally:
        get_settings.cache_clear()
