"""HTTP task gateway - requests client for the remote task collection."""

import asyncio
import logging

import requests

from countdown.config import Config, load_config, resolve_base_url
from countdown.core.tasks import Task, clean_title, preview, tasks_from_api
from countdown.errors import (
    FetchFailure,
    MalformedResponse,
    RemoteFailure,
    TransportFailure,
)

logger = logging.getLogger(__name__)

DEFAULT_CREATE_ERROR = "Failed to add task."
DEFAULT_UPDATE_ERROR = "Failed to update task."
DEFAULT_DELETE_ERROR = "Failed to delete task."


def _is_success(resp: requests.Response) -> bool:
    return 200 <= resp.status_code < 300


def _error_message(resp: requests.Response, default: str) -> str:
    """Message from a structured {"error": ...} body, else the default."""
    try:
        data = resp.json()
    except ValueError:
        return default
    if isinstance(data, dict) and isinstance(data.get("error"), str) and data["error"]:
        return data["error"]
    return default


def _json_body(resp: requests.Response) -> object:
    try:
        return resp.json()
    except ValueError:
        raise MalformedResponse(resp.text[:100])


class HttpTaskGateway:
    """
    HTTP task gateway.

    Implements TaskGateway protocol. Each call is a single blocking request
    run in a worker thread, so callers can await it. No retries, no business
    logic - just I/O.
    """

    def __init__(self, config: Config | None = None, session: requests.Session | None = None):
        self.config = config or load_config()
        self._session = session or requests.Session()

    @property
    def base_url(self) -> str:
        """Resolved collection URL; raises ConfigurationError when unset in deployment."""
        return resolve_base_url(self.config)

    def _request(self, method: str, url: str, body: dict | None = None) -> requests.Response:
        """Send one request, translating transport errors."""
        logger.debug(f"{method} {url} body={body}")
        try:
            resp = self._session.request(
                method,
                url,
                json=body,
                headers={"Content-Type": "application/json"} if body is not None else None,
                timeout=self.config.request_timeout,
            )
        except requests.RequestException as e:
            logger.error(f"{method} {url} failed: {e}")
            raise TransportFailure() from e
        logger.debug(f"{method} {url} -> {resp.status_code}")
        return resp

    # ============== Blocking calls ==============

    def _list_sync(self) -> list[Task]:
        resp = self._request("GET", self.base_url)
        if resp.status_code != 200:
            logger.error(f"Listing tasks failed ({resp.status_code}): {resp.text}")
            raise FetchFailure(resp.status_code)

        data = _json_body(resp)
        if not isinstance(data, list):
            logger.warning(f"Task list response is not an array: {preview(data)}")
        return tasks_from_api(data)

    def _write_sync(self, method: str, url: str, body: dict | None, default_error: str) -> object:
        resp = self._request(method, url, body)
        if not _is_success(resp):
            message = _error_message(resp, default_error)
            logger.error(f"{method} {url} rejected ({resp.status_code}): {message}")
            raise RemoteFailure(message, status=resp.status_code)
        return resp

    def _create_sync(self, body: dict) -> Task:
        resp = self._write_sync("POST", self.base_url, body, DEFAULT_CREATE_ERROR)
        return Task.from_api(_json_body(resp))

    def _update_sync(self, task_id: str, body: dict) -> Task:
        resp = self._write_sync("PUT", f"{self.base_url}/{task_id}", body, DEFAULT_UPDATE_ERROR)
        return Task.from_api(_json_body(resp))

    def _delete_sync(self, task_id: str) -> None:
        self._write_sync("DELETE", f"{self.base_url}/{task_id}", None, DEFAULT_DELETE_ERROR)

    # ============== Async API ==============

    async def list(self) -> list[Task]:
        """Fetch all tasks."""
        return await asyncio.to_thread(self._list_sync)

    async def create(self, title: str, deadline: str | None = None) -> Task:
        """Create a task. Raises ValidationFailure for a blank title without sending anything."""
        body = {"title": clean_title(title)}
        if deadline is not None and deadline != "":
            body["deadline"] = deadline
        return await asyncio.to_thread(self._create_sync, body)

    async def update(
        self,
        task_id: str,
        title: str,
        deadline: str | int | float | None = None,
        completed: bool | None = None,
    ) -> Task:
        """Update a task. The server requires the title on every update."""
        body = {"title": clean_title(title)}
        if deadline is not None and deadline != "":
            body["deadline"] = deadline
        if completed is not None:
            body["completed"] = completed
        return await asyncio.to_thread(self._update_sync, task_id, body)

    async def delete(self, task_id: str) -> None:
        """Delete a task."""
        await asyncio.to_thread(self._delete_sync, task_id)
