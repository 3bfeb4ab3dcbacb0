"""Concourse payloads: what the check, in and out steps read on stdin and write on stdout."""

import json

from pydantic import BaseModel, ConfigDict, Field, NonNegativeInt, SecretStr

from ghir.models import TicketState


class Version(BaseModel):
    """Trigger token. Concourse fires on any returned version it has not seen before."""

    model_config = ConfigDict(frozen=True)

    state: str

    @classmethod
    def of(cls, state: TicketState) -> "Version":
        return cls(state=state.value)


OPEN = Version.of(TicketState.OPEN)
CLOSED = Version.of(TicketState.CLOSED)


class Source(BaseModel):
    model_config = ConfigDict(frozen=True)

    pat: SecretStr | None = None
    owner: str = Field(min_length=1)
    repo: str = Field(min_length=1)
    # check only; out always creates a new issue
    number: NonNegativeInt | None = None


class OutParams(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str | None = None
    body: str | None = None
    labels: list[str] | None = None
    assignees: list[str] | None = None
    milestone: NonNegativeInt | None = None


class MetadataField(BaseModel):
    name: str
    value: str


class OutMetadata(BaseModel):
    model_config = ConfigDict(frozen=True)

    number: int
    labels: list[str] | None = None
    assignees: list[str] | None = None

    def to_fields(self) -> list[MetadataField]:
        """Flatten into Concourse name/value pairs. Absent fields are skipped."""
        fields = [MetadataField(name="number", value=str(self.number))]
        for name in ("labels", "assignees"):
            value = getattr(self, name)
            if value is not None:
                fields.append(MetadataField(name=name, value=json.dumps(value)))
        return fields


class CheckRequest(BaseModel):
    source: Source | None = None
    version: Version | None = None


class OutRequest(BaseModel):
    source: Source | None = None
    params: OutParams | None = None


class StepResponse(BaseModel):
    """Output of in and out."""

    version: Version
    metadata: list[MetadataField] = []
