"""GHIR CLI — the check, in and out entry points Concourse runs."""

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Annotated, TypeVar

import typer
from pydantic import BaseModel, TypeAdapter, ValidationError
from rich.markup import escape

from ghir import resource
from ghir.errors import InvalidPayload, ResourceError
from ghir.payloads import CheckRequest, OutRequest, Version

app = typer.Typer(help="Concourse resource that watches and creates GitHub issues", no_args_is_help=True)

PayloadT = TypeVar("PayloadT", bound=BaseModel)

_versions = TypeAdapter(list[Version])


# ---------------------------------------------------------------------------
# Payload helpers
# ---------------------------------------------------------------------------


def _read_payload(model: type[PayloadT]) -> PayloadT:
    raw = typer.get_text_stream("stdin").read()
    try:
        return model.model_validate_json(raw)
    except ValidationError as exc:
        raise InvalidPayload(f"Invalid {model.__name__} payload on stdin:\n{exc}") from exc


@contextmanager
def _fatal_on_error() -> Iterator[None]:
    """Log any resource error to stderr and exit 1 so Concourse marks the step failed."""
    try:
        yield
    except ResourceError as exc:
        resource.console.print(f"[red]error:[/red] {escape(str(exc))}")
        raise typer.Exit(1) from exc


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@app.command("check")
def check_cmd() -> None:
    """Report the issue's state as a list of versions."""
    with _fatal_on_error():
        request = _read_payload(CheckRequest)
        versions = resource.check(request.source, request.version)
    typer.echo(_versions.dump_json(versions).decode())


@app.command("in")
def in_cmd(
    destination: Annotated[Path, typer.Argument(help="Directory Concourse provides for fetched content")],
) -> None:
    """Fetch step. Always succeeds without touching GitHub."""
    # Concourse always pipes a payload; drain it even though nothing here needs it.
    typer.get_text_stream("stdin").read()
    response = resource.fetch(destination=destination)
    typer.echo(response.model_dump_json())


@app.command("out")
def out_cmd(
    sources: Annotated[Path, typer.Argument(help="Directory holding the build's inputs")],
) -> None:
    """Create an issue from params and report it as metadata."""
    with _fatal_on_error():
        request = _read_payload(OutRequest)
        response = resource.put(request.source, request.params)
    typer.echo(response.model_dump_json())
