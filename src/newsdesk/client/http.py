"""HTTP client for the agent platform REST API."""

from __future__ import annotations

import logging
import uuid
from typing import Any

import httpx

from newsdesk.client.protocols import (
    ExecutionLogResult,
    InvocationResult,
    MutationResult,
    ScheduleListResult,
)
from newsdesk.config.models import ApiConfig
from newsdesk.digests.types import ExecutionLog
from newsdesk.scheduling.types import ScheduleState

logger = logging.getLogger(__name__)

INFERENCE_PATH = "/v3/inference/chat/"
SCHEDULES_PATH = "/v3/scheduler/schedules"


class ApiError(Exception):
    """A request that did not produce a usable response."""


class AgentApiClient:
    """Agent invocation and schedule management over HTTP.

    Implements both AgentClient and SchedulerClient. Transport failures and
    error responses are reported as unsuccessful results, never raised.

    Example:
        async with AgentApiClient(config.api) as client:
            result = await client.list_schedules(config.agents.manager)
    """

    def __init__(
        self,
        config: ApiConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config
        headers = {"Accept": "application/json"}
        if config.api_key is not None:
            headers["x-api-key"] = config.api_key.get_secret_value()
        self._http = httpx.AsyncClient(
            base_url=config.base_url,
            headers=headers,
            timeout=config.timeout,
            transport=transport,
        )

    async def __aenter__(self) -> AgentApiClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def invoke(self, message: str, agent_id: str) -> InvocationResult:
        body = {
            "agent_id": agent_id,
            "message": message,
            "user_id": self._config.user_id,
            "session_id": f"{agent_id}-{uuid.uuid4().hex[:12]}",
        }
        try:
            data = await self._request("POST", INFERENCE_PATH, json=body)
        except ApiError as e:
            return InvocationResult(success=False, error=str(e))

        if isinstance(data, dict):
            if data.get("success") is False:
                return InvocationResult(
                    success=False, error=_error_text(data) or "Agent call failed"
                )
            response = data.get("response", data)
        else:
            response = data
        return InvocationResult(success=True, response=response)

    async def list_schedules(self, agent_id: str) -> ScheduleListResult:
        try:
            data = await self._request(
                "GET", SCHEDULES_PATH, params={"agent_id": agent_id}
            )
        except ApiError as e:
            return ScheduleListResult(success=False, error=str(e))

        items = _unwrap_list(data, "schedules")
        if items is None:
            return ScheduleListResult(
                success=False, error="Unexpected schedule listing payload"
            )
        schedules = [s for s in map(ScheduleState.from_dict, items) if s is not None]
        return ScheduleListResult(success=True, schedules=schedules)

    async def pause_schedule(self, schedule_id: str) -> MutationResult:
        return await self._mutate(schedule_id, "pause")

    async def resume_schedule(self, schedule_id: str) -> MutationResult:
        return await self._mutate(schedule_id, "resume")

    async def get_schedule_logs(
        self, schedule_id: str, limit: int = 50
    ) -> ExecutionLogResult:
        try:
            data = await self._request(
                "GET", f"{SCHEDULES_PATH}/{schedule_id}/logs", params={"limit": limit}
            )
        except ApiError as e:
            return ExecutionLogResult(success=False, error=str(e))

        items = _unwrap_list(data, "executions")
        if items is None:
            return ExecutionLogResult(
                success=False, error="Unexpected execution log payload"
            )
        executions = [e for e in map(ExecutionLog.from_dict, items) if e is not None]
        return ExecutionLogResult(success=True, executions=executions)

    async def _mutate(self, schedule_id: str, action: str) -> MutationResult:
        try:
            data = await self._request("POST", f"{SCHEDULES_PATH}/{schedule_id}/{action}")
        except ApiError as e:
            return MutationResult(success=False, error=str(e))
        if isinstance(data, dict) and data.get("success") is False:
            return MutationResult(success=False, error=_error_text(data))
        return MutationResult(success=True)

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        """Send a request and decode its JSON body.

        Raises:
            ApiError: On transport failure, error status or non-JSON body.
        """
        try:
            response = await self._http.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            logger.warning(
                "api_transport_error",
                extra={"http.method": method, "http.path": path, "error.message": str(e)},
            )
            raise ApiError(f"Request failed: {e}") from e

        logger.debug(
            "api_response",
            extra={
                "http.method": method,
                "http.path": path,
                "http.status_code": response.status_code,
            },
        )

        if response.is_error:
            message = _error_text(_json_or_none(response)) or response.reason_phrase
            logger.warning(
                "api_error_status",
                extra={
                    "http.path": path,
                    "http.status_code": response.status_code,
                    "error.message": message,
                },
            )
            raise ApiError(f"HTTP {response.status_code}: {message}")

        if not response.content:
            return None
        data = _json_or_none(response)
        if data is None:
            raise ApiError("Response body is not JSON")
        return data


def _json_or_none(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return None


def _error_text(data: Any) -> str | None:
    if not isinstance(data, dict):
        return None
    for key in ("error", "detail", "message"):
        value = data.get(key)
        if isinstance(value, str) and value:
            return value
    return None


def _unwrap_list(data: Any, key: str) -> list[Any] | None:
    if isinstance(data, list):
        return data
    if isinstance(data, dict):
        if data.get("success") is False:
            return None
        items = data.get(key)
        if isinstance(items, list):
            return items
    return None
