"""CLI command implementations"""

from typing import Annotated, Optional

import typer
from sqlmodel import Session

from mdsite.config import Settings, load_config
from mdsite.core.pipeline import run_build
from mdsite.crud.database import init_db, make_engine, reset_db
from mdsite.crud.resources import get_all_records, get_by_collection
from mdsite.errors import MdsiteError


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


def build_cmd(
    source: Annotated[Optional[str], typer.Option("--source-dir", help="Site source directory")] = None,
    out: Annotated[Optional[str], typer.Option("--out-dir", help="Output directory")] = None,
    future: Annotated[Optional[bool], typer.Option("--future", help="Publish future-dated resources")] = None,
    unpublished: Annotated[Optional[bool], typer.Option("--unpublished", help="Publish unpublished resources")] = None,
    ):
    """Read, transform and write every resource, then record the build."""
    settings = _settings(overrides={
        "source_dir": source, "output_dir": out, "future": future, "unpublished": unpublished,
    })
    engine = make_engine(settings.db_url)
    init_db(engine)

    try:
        site, written, counts = run_build(settings, engine)
    except (MdsiteError, RuntimeError, ValueError) as e:
        _fail("Build failed", e)

    for resource, path in written:
        typer.echo(f"  {resource.relative_path} -> {path}")
    typer.echo(
        f"Build complete - {len(written)} written of {len(site.resources)} read "
        f"({counts.get('created', 0)} created, {counts.get('updated', 0)} updated, "
        f"{counts.get('unchanged', 0)} unchanged)"
    )


def list_cmd(
    collection: Annotated[Optional[str], typer.Option("--collection", help="Only list this collection")] = None,
    ):
    """List resources recorded by the last builds."""
    settings = _settings()
    engine = make_engine(settings.db_url)
    init_db(engine)
    with Session(engine) as session:
        records = get_by_collection(session, collection) if collection else get_all_records(session)
    if not records:
        typer.echo("No resources found in build index.")
        raise typer.Exit(1)
    for r in records:
        typer.echo(f"{r.collection}\t{r.relative_path}\t{r.url or '-'}")


def init_cmd(
    reset: Annotated[bool, typer.Option("--reset", help="Drop and recreate all tables")] = False,
    ):
    """Initialize the build index schema. Use --reset to clear existing data."""
    settings = _settings()
    engine = make_engine(settings.db_url)
    if reset:
        reset_db(engine)
        typer.echo("Existing data cleared.")
    else:
        init_db(engine)
    typer.echo(f"Build index initialized at: {settings.db_url}")
