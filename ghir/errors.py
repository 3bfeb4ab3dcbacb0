"""Exceptions raised by the resource steps and the GitHub provider."""


class ResourceError(RuntimeError):
    """Base class for every fatal resource error."""


class ConfigMissing(ResourceError):
    def __init__(self, what: str) -> None:
        self.what = what
        super().__init__(f"{what} is required but was not provided in the resource configuration")


class InvalidPayload(ResourceError):
    """Stdin payload is not JSON or does not match the expected shape."""


class NumberUnspecified(ResourceError):
    def __init__(self, operation: str) -> None:
        super().__init__(f"Issue number must be specified to {operation} an issue")


class TitleUnspecified(ResourceError):
    def __init__(self) -> None:
        super().__init__("Issue title must be specified to create an issue")


class UnrecognizedState(ResourceError):
    def __init__(self, state: object) -> None:
        self.state = state
        super().__init__(f"GitHub returned unrecognized issue state {state!r} (expected 'open' or 'closed')")


class RemoteCallFailed(ResourceError):
    """GitHub API call failed. The httpx exception, if any, is chained as __cause__."""
