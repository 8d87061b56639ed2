"""Contracts for the remote agent platform.

The core only depends on these protocols. Every call reports failure through
its result object instead of raising, but callers still guard against
exceptions from other implementations.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol

from newsdesk.digests.types import ExecutionLog
from newsdesk.scheduling.types import ScheduleState


@dataclass(frozen=True)
class InvocationResult:
    success: bool
    response: Any = None
    error: str | None = None


@dataclass(frozen=True)
class ScheduleListResult:
    success: bool
    schedules: list[ScheduleState] = field(default_factory=list)
    error: str | None = None


@dataclass(frozen=True)
class MutationResult:
    success: bool
    error: str | None = None


@dataclass(frozen=True)
class ExecutionLogResult:
    success: bool
    executions: list[ExecutionLog] = field(default_factory=list)
    error: str | None = None


class AgentClient(Protocol):
    async def invoke(self, message: str, agent_id: str) -> InvocationResult: ...


class SchedulerClient(Protocol):
    async def list_schedules(self, agent_id: str) -> ScheduleListResult: ...

    async def pause_schedule(self, schedule_id: str) -> MutationResult: ...

    async def resume_schedule(self, schedule_id: str) -> MutationResult: ...

    async def get_schedule_logs(
        self, schedule_id: str, limit: int = 50
    ) -> ExecutionLogResult: ...
