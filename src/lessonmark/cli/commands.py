"""CLI command implementations"""

import json
import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from pydantic import ValidationError
from sqlmodel import Session

from lessonmark.cli.preview import TerminalPreview
from lessonmark.config import Settings, load_config
from lessonmark.core.models import dump_document, load_document_json
from lessonmark.core.parse import parse
from lessonmark.core.pipeline import check_round_trip
from lessonmark.core.render.render import render
from lessonmark.core.serialize import serialize, unsafe_values
from lessonmark.core.utils.ids import CounterIdGenerator, RandomIdGenerator
from lessonmark.crud.database import init_db, make_engine, reset_db
from lessonmark.crud.sql_store import SQLStore


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling."""
    try:
        return load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))


def configure_logging(level: Optional[str] = None) -> None:
    settings = _settings(overrides={"log_level": level.upper() if level else None})
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _read(path: str) -> str:
    try:
        return Path(path).read_text(encoding="utf-8")
    except OSError as e:
        _fail(f"Cannot read {path}", e)


def parse_cmd(
    path: Annotated[str, typer.Argument(help="Markup file to parse")],
    counter_ids: Annotated[bool, typer.Option("--counter-ids", help="Use sequential ids for reproducible output")] = False,
    ):
    """Parse storage markup into editor blocks (JSON)."""
    settings = _settings()
    ids = CounterIdGenerator() if counter_ids else RandomIdGenerator(settings.id_length)
    doc = parse(_read(path), ids=ids, max_depth=settings.max_depth)
    typer.echo(dump_document(doc))


def serialize_cmd(
    path: Annotated[str, typer.Argument(help="JSON file of editor blocks")],
    ):
    """Serialize editor blocks (JSON) back into storage markup."""
    try:
        doc = load_document_json(_read(path))
    except ValidationError as e:
        _fail(f"{path} is not a valid block list", e)
    for block_id, name in unsafe_values(doc):
        typer.echo(f"Warning: block {block_id} field {name} contains '\"'", err=True)
    typer.echo(serialize(doc))


def render_cmd(
    path: Annotated[str, typer.Argument(help="Markup file to render")],
    unescape: Annotated[Optional[str], typer.Option("--unescape", help="auto, always, or never")] = None,
    ):
    """Render storage markup into the display tree (JSON)."""
    settings = _settings(overrides={"unescape": unescape})
    tree = render(
        _read(path),
        unescape=settings.unescape,
        max_depth=settings.max_depth,
        highlight=settings.highlight,
        copy_reset=settings.copy_reset_seconds,
    )
    typer.echo(tree.model_dump_json(indent=2))


def preview_cmd(
    path: Annotated[str, typer.Argument(help="Markup file to preview")],
    unescape: Annotated[Optional[str], typer.Option("--unescape", help="auto, always, or never")] = None,
    ):
    """Show the display tree of a markup file in the terminal."""
    settings = _settings(overrides={"unescape": unescape})
    tree = render(_read(path), unescape=settings.unescape, max_depth=settings.max_depth, highlight=False)
    TerminalPreview().show(tree, title=Path(path).name)


def check_cmd(
    path: Annotated[str, typer.Argument(help="Markup file to check")],
    ):
    """Verify that parse -> serialize -> parse is stable for a markup file."""
    settings = _settings()
    stable, diff = check_round_trip(_read(path), max_depth=settings.max_depth)
    if diff:
        typer.echo("".join(diff))
    if not stable:
        typer.echo("Round trip is NOT stable.", err=True)
        raise typer.Exit(1)
    typer.echo("Round trip is stable.")


def init_cmd(
    reset: Annotated[bool, typer.Option("--reset", help="Drop and recreate all tables")] = False,
    ):
    """Initialize the content store schema. Use --reset to clear existing data."""
    settings = _settings()
    engine = make_engine(settings.db_url)
    if reset:
        reset_db(engine)
        typer.echo("Existing data cleared.")
    else:
        init_db(engine)
    typer.echo(f"Database initialized at: {settings.db_url}")


def push_cmd(
    topic_id: Annotated[str, typer.Argument(help="Topic identifier")],
    path: Annotated[str, typer.Argument(help="Markup file to store")],
    ):
    """Store a markup file as a topic's content."""
    settings = _settings()
    markup = _read(path)
    engine = make_engine(settings.db_url)
    init_db(engine)
    try:
        with Session(engine) as session:
            _, changed = SQLStore(session).save(topic_id, markup)
    except Exception as e:
        _fail("Save failed", e)
    typer.echo(f"{'updated' if changed else 'unchanged'}: {topic_id}")


def pull_cmd(
    topic_id: Annotated[str, typer.Argument(help="Topic identifier")],
    envelope: Annotated[bool, typer.Option("--envelope", help="Print the JSON envelope instead of raw markup")] = False,
    ):
    """Print a topic's stored markup."""
    settings = _settings()
    engine = make_engine(settings.db_url)
    init_db(engine)
    with Session(engine) as session:
        record = SQLStore(session).get_record(topic_id)
    if record is None:
        typer.echo(f"No content stored for topic: {topic_id}", err=True)
        raise typer.Exit(1)
    typer.echo(json.dumps(record.envelope(), indent=2) if envelope else record.content)
