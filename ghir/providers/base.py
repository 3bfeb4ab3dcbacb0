"""Abstract base class for ticket providers."""

from abc import ABC, abstractmethod

from ghir.models import MutationRequest, MutationResult, TicketRef, TicketState


class TicketProvider(ABC):
    @abstractmethod
    def create(self, ref: TicketRef, req: MutationRequest) -> MutationResult: ...

    @abstractmethod
    def read(self, ref: TicketRef) -> TicketState: ...

    @abstractmethod
    def update(self, ref: TicketRef, req: MutationRequest) -> MutationResult: ...
