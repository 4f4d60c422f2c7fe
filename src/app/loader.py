"""Data loader: authenticated fetch driving one view's LoadState."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Protocol

import httpx

from src.app.credentials import CREDENTIAL_KEY, CredentialStore
from src.app.load_state import Error, Loading, LoadState, Ready

logger = logging.getLogger("study_dashboard")

AUTH_MISSING_MESSAGE = "Authentication token missing. Please sign in."


class LoadError(Exception):
    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class AuthMissing(LoadError):
    """No credential available; no request was issued."""


class RequestFailed(LoadError):
    """Non-success status, transport failure, or unreadable body."""


class ErrorReporter(Protocol):
    def report(self, message: str) -> None: ...


@dataclass(frozen=True)
class Resource:
    path: str
    field: str
    label: str


DASHBOARD_STATS = Resource(path="/api/dashboard-stats", field="stats", label="dashboard")
MY_NOTES = Resource(path="/api/my-notes", field="notes", label="notes")


def _error_detail(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    message = body.get("message") if isinstance(body, dict) else None
    if message:
        return str(message)
    return f"HTTP error! status: {response.status_code}"


async def fetch_resource(
    client: httpx.AsyncClient,
    resource: Resource,
    token: str,
    timeout_s: float,
) -> Any:
    """GET a resource with a bearer token and return its top-level payload field."""
    try:
        response = await client.get(
            resource.path,
            headers={"Authorization": f"Bearer {token}"},
            timeout=timeout_s,
            follow_redirects=True,
        )
    except httpx.RequestError as e:
        raise RequestFailed(str(e) or type(e).__name__) from e

    logger.info(f"[loader] GET {resource.path} -> {response.status_code}")
    if not response.is_success:
        raise RequestFailed(_error_detail(response))

    try:
        data = response.json()
    except ValueError as e:
        raise RequestFailed(str(e)) from e

    if not isinstance(data, dict) or resource.field not in data:
        raise RequestFailed(f"response has no '{resource.field}' field")
    return data[resource.field]


class ViewLoader:
    """
    Owns the LoadState slot of one view instance.

    Each activation takes a new generation number. Results that arrive for an
    older generation are dropped, so the state always reflects the most recent
    activation. Failures go to two sinks: the local state and the reporter.
    """

    def __init__(
        self,
        resource: Resource,
        credentials: CredentialStore,
        reporter: ErrorReporter | None = None,
        *,
        base_url: str,
        timeout_s: float = 15.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.resource = resource
        self.state: LoadState = Loading()
        self._credentials = credentials
        self._reporter = reporter
        self._base_url = base_url
        self._timeout_s = timeout_s
        self._transport = transport
        self._generation = 0
        self._task: asyncio.Task | None = None

    @property
    def generation(self) -> int:
        return self._generation

    def _begin(self) -> int:
        self._generation += 1
        self.state = Loading()
        logger.info(f"[loader] activating {self.resource.label} (generation {self._generation})")
        return self._generation

    async def activate(self) -> LoadState:
        """Run one full load and return the resulting state."""
        return await self._run(self._begin())

    def start(self) -> asyncio.Task:
        """
        Schedule a load on an already running event loop.

        Cancelling entry point for async callers: a superseded in-flight load is
        cancelled before the new one starts. Synchronous callers (the Streamlit
        pages) use `asyncio.run(loader.activate())` instead.
        """
        if self._task is not None and not self._task.done():
            self._task.cancel()
        generation = self._begin()
        self._task = asyncio.ensure_future(self._run(generation))
        return self._task

    async def _fetch(self) -> Any:
        token = self._credentials.get(CREDENTIAL_KEY)
        if not token:
            raise AuthMissing(AUTH_MISSING_MESSAGE)
        async with httpx.AsyncClient(base_url=self._base_url, transport=self._transport) as client:
            try:
                return await asyncio.wait_for(
                    fetch_resource(client, self.resource, token, self._timeout_s),
                    self._timeout_s,
                )
            except asyncio.TimeoutError as e:
                raise RequestFailed("request timed out") from e

    async def _run(self, generation: int) -> LoadState:
        try:
            payload = await self._fetch()
        except AuthMissing as e:
            if self._is_current(generation):
                self._fail(e.message)
        except RequestFailed as e:
            if self._is_current(generation):
                self._fail(f"Failed to load {self.resource.label}: {e.message}")
        else:
            if self._is_current(generation):
                self.state = Ready(payload)
        finally:
            if generation == self._generation and isinstance(self.state, Loading):
                self._fail(f"Failed to load {self.resource.label}: request interrupted")
        return self.state

    def _is_current(self, generation: int) -> bool:
        if generation == self._generation:
            return True
        logger.debug(
            f"[loader] dropping stale {self.resource.label} result "
            f"(generation {generation}, current {self._generation})"
        )
        return False

    def _fail(self, message: str) -> None:
        logger.error(f"[loader] {message}")
        self.state = Error(message)
        if self._reporter is not None:
            self._reporter.report(message)
