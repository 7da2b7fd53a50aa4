# getby/cli.py
from __future__ import annotations

"""Command-line interface
------------------------
Compile single lookups or YAML batches into selector strings, validate
batches, and view effective config. Selectors go to stdout, logs to stderr.
"""
import json
import sys
from pathlib import Path
from typing import Callable, List, Optional

import click

from getby.utils.config import get_settings
from getby.utils.logger import configure_logging, get_logger, bind, unbind, set_log_level
from getby.core.query_loader import QueryKind, compile_query_file, load_query_files
from getby.selectors.builder import SelectorBuilder
from getby.selectors.context import SelectorContext
from getby.selectors.errors import SelectorError
from getby.selectors.values import TextLiteral, TextPattern, TextValue


# -------- helpers --------


def _echo_json(obj) -> None:
    click.echo(json.dumps(obj, indent=2, ensure_ascii=False))


def _find_yaml_files(root: Path, recursive: bool = True) -> list[Path]:
    if recursive:
        return sorted(list(root.rglob("*.yaml")) + list(root.rglob("*.yml")))
    return sorted(list(root.glob("*.yaml")) + list(root.glob("*.yml")))


def _collect(targets: List[str], queries_dir: Optional[str], recursive: bool) -> list[Path]:
    paths: list[Path] = []
    if targets:
        for p in (Path(t).resolve() for t in targets):
            if p.is_dir():
                paths.extend(_find_yaml_files(p, recursive=recursive))
            else:
                paths.append(p)
    else:
        root = Path(queries_dir) if queries_dir else get_settings().QUERIES_DIR
        if root.is_dir():
            paths.extend(_find_yaml_files(root, recursive=recursive))
    return paths


def _text_value(value: str, regex: bool, flags: str) -> TextValue:
    if not regex:
        if flags:
            raise click.UsageError("--flags only applies together with --regex")
        return TextLiteral(value)
    try:
        return TextPattern(source=value, flags=flags)
    except SelectorError as e:
        raise click.BadParameter(str(e), param_hint="--flags") from e


def _text_command(name: str, compile_fn: Callable[..., str], help_text: str):
    @click.argument("value")
    @click.option("--exact/--no-exact", default=False, show_default=True, help="Match the full string, case-sensitively")
    @click.option("--regex", is_flag=True, default=False, help="Treat VALUE as a regular expression source")
    @click.option("--flags", default="", help="Regex flags when --regex is given (e.g. i, ims)")
    def _cmd(value: str, exact: bool, regex: bool, flags: str):
        click.echo(compile_fn(SelectorBuilder(), _text_value(value, regex, flags), exact=exact))

    _cmd.__doc__ = help_text
    return cli.command(name)(_cmd)


# -------- CLI root --------


@click.group(context_settings=dict(help_option_names=["-h", "--help"]))
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    default=None,
    help="Override LOG_LEVEL from settings",
)
@click.version_option(package_name="getby-selectors")
def cli(log_level: Optional[str]):
    configure_logging()
    if log_level:
        set_log_level(log_level.upper())


# -------- commands --------


@cli.command("config")
def cmd_config():
    """Print effective configuration (after .env & env vars)."""
    _echo_json(get_settings().model_dump(mode="json"))


_text_command("text", SelectorBuilder.text_selector, "Compile a get_by_text lookup.")
_text_command("label", SelectorBuilder.label_selector, "Compile a get_by_label lookup.")
_text_command("alt-text", SelectorBuilder.alt_text_selector, "Compile a get_by_alt_text lookup.")
_text_command("title", SelectorBuilder.title_selector, "Compile a get_by_title lookup.")
_text_command("placeholder", SelectorBuilder.placeholder_selector, "Compile a get_by_placeholder lookup.")


@cli.command("test-id")
@click.argument("value")
@click.option("--attribute", default=None, help="Attribute to match instead of TEST_ID_ATTRIBUTE")
@click.option("--regex", is_flag=True, default=False, help="Treat VALUE as a regular expression source")
@click.option("--flags", default="", help="Regex flags when --regex is given")
def cmd_test_id(value: str, attribute: Optional[str], regex: bool, flags: str):
    """Compile a get_by_test_id lookup."""
    context = SelectorContext(test_id_attribute=attribute) if attribute else None
    click.echo(SelectorBuilder(context).test_id_selector(_text_value(value, regex, flags)))


@cli.command("role")
@click.argument("role")
@click.option("--name", default=None, help="Accessible name (case-insensitive substring)")
@click.option("--checked/--no-checked", default=None)
@click.option("--disabled/--no-disabled", default=None)
@click.option("--selected/--no-selected", default=None)
@click.option("--expanded/--no-expanded", default=None)
@click.option("--include-hidden/--no-include-hidden", "include_hidden", default=None)
@click.option("--level", type=click.IntRange(min=1), default=None, help="Heading level")
@click.option("--pressed/--no-pressed", default=None)
def cmd_role(role: str, name: Optional[str], checked, disabled, selected, expanded, include_hidden, level, pressed):
    """Compile a get_by_role lookup. Options left unset are not emitted."""
    click.echo(
        SelectorBuilder().role_selector(
            role,
            checked=checked,
            disabled=disabled,
            selected=selected,
            expanded=expanded,
            includeHidden=include_hidden,
            level=level,
            name=name,
            pressed=pressed,
        )
    )


@cli.command("compile")
@click.argument("targets", nargs=-1, required=False)
@click.option("--dir", "queries_dir", type=click.Path(file_okay=False, dir_okay=True, exists=True), help="Compile all query files under this directory [default: QUERIES_DIR]")
@click.option("--recursive/--no-recursive", default=True, show_default=True)
@click.option("--json", "as_json", is_flag=True, default=False, help="Emit a JSON document instead of one selector per line")
def cmd_compile(targets: List[str], queries_dir: Optional[str], recursive: bool, as_json: bool):
    """
    Compile query batches into selector strings.

    Examples:
      getby compile queries/login.yaml
      getby compile --dir queries --json
    """
    log = get_logger(__name__)
    paths = _collect(targets, queries_dir, recursive)
    if not paths:
        click.echo("Nothing to compile. Provide file(s), --dir, or populate QUERIES_DIR.")
        sys.exit(2)

    results: list[dict] = []
    failed = 0
    for fp in paths:
        bind(source=str(fp))
        try:
            for doc in load_query_files(fp):
                selectors = compile_query_file(doc)
                for q, sel in zip(doc.queries, selectors):
                    results.append({
                        "file": str(fp),
                        "document": doc.name,
                        "kind": QueryKind(q.kind).value,
                        "description": q.description,
                        "selector": sel,
                    })
                log.debug(f"compiled {len(selectors)} quer(ies) from {fp}")
        except (SelectorError, FileNotFoundError) as e:
            failed += 1
            click.echo(f"ERR {fp}  ->  {e}", err=True)
        finally:
            unbind("source")

    if as_json:
        _echo_json({"selectors": results})
    else:
        for r in results:
            click.echo(r["selector"])

    sys.exit(0 if failed == 0 else 1)


@cli.command("validate")
@click.argument("targets", nargs=-1, required=False)
@click.option("--dir", "queries_dir", type=click.Path(file_okay=False, dir_okay=True, exists=True), help="Validate all query files under this directory [default: QUERIES_DIR]")
@click.option("--recursive/--no-recursive", default=True, show_default=True)
def cmd_validate(targets: List[str], queries_dir: Optional[str], recursive: bool):
    """Validate query files from paths or a directory (supports multi-doc YAML)."""
    paths = _collect(targets, queries_dir, recursive)
    if not paths:
        click.echo("Nothing to validate. Provide file(s), --dir, or populate QUERIES_DIR.")
        sys.exit(2)

    ok = True
    for fp in paths:
        try:
            for doc in load_query_files(fp):
                compile_query_file(doc)
                click.echo(f"OK  {fp}  ->  {doc.name or '<unnamed>'} ({len(doc.queries)} queries)")
        except (SelectorError, FileNotFoundError) as e:
            ok = False
            click.echo(f"ERR {fp}  ->  {e}")

    sys.exit(0 if ok else 1)


def main() -> None:
    cli(prog_name="getby")


if __name__ == "__main__":
    main()
