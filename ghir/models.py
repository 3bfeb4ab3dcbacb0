"""Shared pydantic models — the contract between providers and the resource steps."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, NonNegativeInt

from ghir.errors import UnrecognizedState


class TicketState(str, Enum):
    OPEN = "Open"
    CLOSED = "Closed"

    @classmethod
    def from_remote(cls, raw: object) -> "TicketState":
        """Map GitHub's lowercase ``state`` field. Anything else is fatal."""
        match raw:
            case "open":
                return cls.OPEN
            case "closed":
                return cls.CLOSED
            case _:
                raise UnrecognizedState(raw)

    @property
    def remote_value(self) -> str:
        return self.value.lower()


class TicketRef(BaseModel):
    model_config = ConfigDict(frozen=True)

    owner: str = Field(min_length=1)
    repo: str = Field(min_length=1)
    number: NonNegativeInt | None = None  # None until the issue exists

    def __str__(self) -> str:
        suffix = f"#{self.number}" if self.number is not None else ""
        return f"{self.owner}/{self.repo}{suffix}"


class MutationRequest(BaseModel):
    """Fields for a create or update call.

    None means "not supplied" and the field is left out of the request body.
    An empty string or empty list is a real value and is sent as-is, so an
    update with ``labels=[]`` clears every label on the issue.
    """

    model_config = ConfigDict(frozen=True)

    # create and update
    title: str | None = None
    body: str | None = None
    milestone: NonNegativeInt | None = None
    labels: list[str] | None = None
    assignees: list[str] | None = None
    # read and update
    number: NonNegativeInt | None = None
    # update
    state: TicketState | None = None


class MutationResult(BaseModel):
    """Returned by create and update — just what the out step reports."""

    model_config = ConfigDict(frozen=True)

    number: int
    labels: list[str] = []
    assignees: list[str] = []
