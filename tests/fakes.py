"""Fakes and factories shared across tests."""

import asyncio
from typing import Any

from newsdesk.client.protocols import (
    ExecutionLogResult,
    InvocationResult,
    MutationResult,
    ScheduleListResult,
)
from newsdesk.digests.types import DigestEntry, DigestSource, ExecutionLog
from newsdesk.scheduling.types import ScheduleState

SCHEDULE_ID = "sched-1"
AGENT_ID = "agent-1"

# =============================================================================
# Factories
# =============================================================================


def make_log(
    log_id: str,
    executed_at: str,
    success: bool = True,
    output: Any = None,
) -> ExecutionLog:
    return ExecutionLog(
        id=log_id,
        executed_at=executed_at,
        success=success,
        response_output=output if output is not None else {"subject": f"Digest {log_id}"},
    )


def make_entry(
    entry_id: str,
    timestamp: str,
    source: DigestSource = DigestSource.SCHEDULED,
    subject: str = "Digest",
) -> DigestEntry:
    return DigestEntry(
        id=entry_id,
        timestamp=timestamp,
        subject=subject,
        recipient="reader@example.com",
        source=source,
    )


# =============================================================================
# Fake collaborators
# =============================================================================


class FakeSchedulerClient:
    """In-memory scheduler; pause/resume flip is_active unless told to lie."""

    def __init__(self, schedules: list[ScheduleState] | None = None) -> None:
        self.schedules = list(schedules or [])
        self.executions: list[ExecutionLog] = []
        self.calls: list[tuple[str, ...]] = []
        self.list_error: Exception | None = None
        self.list_success = True
        self.logs_error: Exception | None = None
        self.logs_success = True
        self.mutation_error: Exception | None = None
        self.mutation_success = True
        self.apply_mutations = True
        self.logs_gate: asyncio.Event | None = None
        self.list_gate: asyncio.Event | None = None

    async def list_schedules(self, agent_id: str) -> ScheduleListResult:
        self.calls.append(("list", agent_id))
        if self.list_gate is not None:
            await self.list_gate.wait()
        if self.list_error:
            raise self.list_error
        if not self.list_success:
            return ScheduleListResult(success=False, error="listing failed")
        return ScheduleListResult(success=True, schedules=list(self.schedules))

    async def pause_schedule(self, schedule_id: str) -> MutationResult:
        return self._mutate("pause", schedule_id, False)

    async def resume_schedule(self, schedule_id: str) -> MutationResult:
        return self._mutate("resume", schedule_id, True)

    async def get_schedule_logs(
        self, schedule_id: str, limit: int = 50
    ) -> ExecutionLogResult:
        self.calls.append(("logs", schedule_id, str(limit)))
        if self.logs_gate is not None:
            await self.logs_gate.wait()
        if self.logs_error:
            raise self.logs_error
        if not self.logs_success:
            return ExecutionLogResult(success=False, error="logs failed")
        return ExecutionLogResult(success=True, executions=list(self.executions))

    def _mutate(self, action: str, schedule_id: str, active: bool) -> MutationResult:
        self.calls.append((action, schedule_id))
        if self.mutation_error:
            raise self.mutation_error
        if self.apply_mutations:
            self.schedules = [
                ScheduleState(
                    id=s.id,
                    cron_expression=s.cron_expression,
                    is_active=active,
                    next_run_time=s.next_run_time if active else None,
                )
                if s.id == schedule_id
                else s
                for s in self.schedules
            ]
        if not self.mutation_success:
            return MutationResult(success=False, error=f"{action} failed")
        return MutationResult(success=True)

    def log_calls(self) -> int:
        return sum(1 for call in self.calls if call[0] == "logs")


class FakeAgentClient:
    def __init__(self, result: InvocationResult | None = None) -> None:
        self.result = result or InvocationResult(
            success=True,
            response='{"subject": "Manual digest", "stories_count": 3}',
        )
        self.error: Exception | None = None
        self.gate: asyncio.Event | None = None
        self.calls: list[tuple[str, str]] = []

    async def invoke(self, message: str, agent_id: str) -> InvocationResult:
        self.calls.append((message, agent_id))
        if self.gate is not None:
            await self.gate.wait()
        if self.error:
            raise self.error
        return self.result
