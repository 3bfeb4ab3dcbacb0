"""The three Concourse steps: check, in (fetch) and out (put).

Every call starts from the payload Concourse hands over and keeps nothing
afterwards. The only memory between polls is the version Concourse stores.
"""

from pathlib import Path

from rich.console import Console
from rich.markup import escape

from ghir.errors import ConfigMissing, UnrecognizedState
from ghir.models import MutationRequest, TicketRef, TicketState
from ghir.payloads import CLOSED, OPEN, OutMetadata, OutParams, Source, StepResponse, Version
from ghir.providers.base import TicketProvider
from ghir.providers.github import GitHubProvider
from ghir.settings import get_settings

# stdout carries the protocol JSON, so everything for the operator goes to stderr.
console = Console(stderr=True)


def get_provider(source: Source) -> TicketProvider:
    token = source.pat.get_secret_value() if source.pat else None
    return GitHubProvider(get_settings(), token=token)


def check(source: Source | None, version: Version | None = None) -> list[Version]:
    """Return [Open] while the issue is open and [Open, Closed] once it is closed.

    Concourse triggers on any version it has not stored yet, so the stable
    "Open" baseline plus a trailing "Closed" surfaces the transition exactly
    once. Without an issue number there is nothing to watch and the step never
    triggers.
    """
    if source is None:
        raise ConfigMissing("source")
    ref = TicketRef(owner=source.owner, repo=source.repo, number=source.number)
    if ref.number is None:
        console.print(f"No issue number configured for {escape(str(ref))}; nothing to check")
        return [OPEN]

    state = get_provider(source).read(ref)
    console.print(f"Issue {escape(str(ref))} is {state.value}")
    match state:
        case TicketState.OPEN:
            return [OPEN]
        case TicketState.CLOSED:
            return [OPEN, CLOSED]
        case _:
            raise UnrecognizedState(state)


def fetch(
    source: Source | None = None,
    version: Version | None = None,
    params: dict | None = None,
    destination: Path | None = None,
) -> StepResponse:
    """No-op: this resource only gates on issue state, it has nothing to put on disk.

    The inputs Concourse hands to the in step are accepted and ignored.
    """
    return StepResponse(version=OPEN)


def put(source: Source | None, params: OutParams | None) -> StepResponse:
    """Create a new issue from params and report its number, labels and assignees."""
    if source is None:
        raise ConfigMissing("source")
    if params is None:
        raise ConfigMissing("params")

    # out always creates, so any configured number is ignored
    ref = TicketRef(owner=source.owner, repo=source.repo)
    req = MutationRequest(
        title=params.title,
        body=params.body,
        milestone=params.milestone,
        labels=params.labels,
        assignees=params.assignees,
    )
    created = get_provider(source).create(ref, req)
    console.print(f"Created issue {escape(ref.owner)}/{escape(ref.repo)}#{created.number}")

    metadata = OutMetadata(number=created.number, labels=created.labels, assignees=created.assignees)
    return StepResponse(version=OPEN, metadata=metadata.to_fields())
