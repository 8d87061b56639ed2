"""Schedule types.

Public types:
- ScheduleStatus: unknown, active or paused
- ScheduleState: Local mirror of one remote schedule
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any


class ScheduleStatus(StrEnum):
    UNKNOWN = "unknown"
    ACTIVE = "active"
    PAUSED = "paused"


@dataclass(frozen=True)
class ScheduleState:
    """A remote schedule as last reported by the schedule listing."""

    id: str
    cron_expression: str = ""
    is_active: bool = False
    next_run_time: str | None = None

    @property
    def status(self) -> ScheduleStatus:
        return ScheduleStatus.ACTIVE if self.is_active else ScheduleStatus.PAUSED

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "cron_expression": self.cron_expression,
            "is_active": self.is_active,
            "next_run_time": self.next_run_time,
        }

    @classmethod
    def from_dict(cls, data: Any) -> ScheduleState | None:
        """Parse a schedule listing item; None when it carries no id."""
        if not isinstance(data, dict):
            return None
        schedule_id = data.get("id") or data.get("_id")
        if not schedule_id:
            return None

        cron = data.get("cron_expression") or data.get("cronExpression") or ""
        next_run = data.get("next_run_time") or data.get("nextRunTime")
        is_active = data.get("is_active", data.get("isActive"))
        return cls(
            id=str(schedule_id),
            cron_expression=cron if isinstance(cron, str) else "",
            is_active=is_active is True,
            next_run_time=next_run if isinstance(next_run, str) else None,
        )
