"""GitHub REST API v3 provider."""

import httpx
from pydantic import ValidationError

from ghir.errors import NumberUnspecified, RemoteCallFailed, TitleUnspecified
from ghir.models import MutationRequest, MutationResult, TicketRef, TicketState
from ghir.providers.base import TicketProvider
from ghir.settings import GhirSettings


class GitHubProvider(TicketProvider):
    def __init__(self, settings: GhirSettings, token: str | None = None) -> None:
        self._base_url = settings.api_url
        self._timeout = settings.timeout
        self._headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": settings.api_version,
        }
        # No token: anonymous requests, limited by GitHub's unauthenticated rate limit.
        if token:
            self._headers["Authorization"] = f"Bearer {token}"

    @property
    def authenticated(self) -> bool:
        return "Authorization" in self._headers

    def _request(self, method: str, path: str, body: dict | None = None) -> dict:
        try:
            response = httpx.request(
                method,
                f"{self._base_url}{path}",
                headers=self._headers,
                json=body,
                timeout=self._timeout,
            )
        except httpx.HTTPError as exc:
            raise RemoteCallFailed(f"{method} {path} failed: {exc}") from exc

        if response.status_code == 401:
            raise RemoteCallFailed("GitHub API returned 401. Check the pat in the resource source.")
        if response.status_code in (403, 429) and response.headers.get("x-ratelimit-remaining") == "0":
            hint = "" if self.authenticated else " Unauthenticated requests have a low limit; set a pat in the source."
            raise RemoteCallFailed(f"GitHub API rate limit exceeded for {method} {path}.{hint}")
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise RemoteCallFailed(
                f"GitHub API returned {response.status_code} for {method} {path}: {_error_message(response)}"
            ) from exc
        try:
            node = response.json()
        except ValueError as exc:
            raise RemoteCallFailed(f"GitHub API returned a non-JSON body for {method} {path}") from exc
        if not isinstance(node, dict):
            raise RemoteCallFailed(
                f"GitHub API returned {type(node).__name__} instead of an object for {method} {path}"
            )
        return node

    def _get(self, path: str) -> dict:
        return self._request("GET", path)

    def _post(self, path: str, body: dict) -> dict:
        return self._request("POST", path, body)

    def _patch(self, path: str, body: dict) -> dict:
        return self._request("PATCH", path, body)

    def _result_from_node(self, node: dict) -> MutationResult:
        try:
            return MutationResult(
                number=node["number"],
                labels=[label["name"] for label in node.get("labels") or []],
                assignees=[user["login"] for user in node.get("assignees") or []],
            )
        except (KeyError, TypeError, ValidationError) as exc:
            raise RemoteCallFailed(f"GitHub API returned an unexpected issue shape: {exc!r}") from exc

    def create(self, ref: TicketRef, req: MutationRequest) -> MutationResult:
        if not req.title:
            raise TitleUnspecified()
        body = req.model_dump(include={"title", "body", "milestone", "labels", "assignees"}, exclude_none=True)
        node = self._post(f"/repos/{ref.owner}/{ref.repo}/issues", body)
        return self._result_from_node(node)

    def read(self, ref: TicketRef) -> TicketState:
        if ref.number is None:
            raise NumberUnspecified("read")
        node = self._get(f"/repos/{ref.owner}/{ref.repo}/issues/{ref.number}")
        return TicketState.from_remote(node.get("state"))

    def update(self, ref: TicketRef, req: MutationRequest) -> MutationResult:
        number = ref.number if ref.number is not None else req.number
        if number is None:
            raise NumberUnspecified("update")
        # Supplied lists replace the issue's lists outright; GitHub does not merge them.
        body = req.model_dump(include={"title", "body", "milestone", "labels", "assignees"}, exclude_none=True)
        if req.state is not None:
            body["state"] = req.state.remote_value
        node = self._patch(f"/repos/{ref.owner}/{ref.repo}/issues/{number}", body)
        return self._result_from_node(node)


def _error_message(response: httpx.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        payload = None
    if isinstance(payload, dict) and "message" in payload:
        return str(payload["message"])
    return response.text or response.reason_phrase
