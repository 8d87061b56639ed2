"""Scheduling subsystem: mirror and toggle the remote digest schedule.

Public API:
- ScheduleController: Refresh and toggle-with-reconciliation

Types:
- ScheduleState: One remote schedule as listed
- ScheduleStatus: unknown, active, paused
"""

from newsdesk.scheduling.controller import ScheduleController
from newsdesk.scheduling.types import ScheduleState, ScheduleStatus

__all__ = [
    "ScheduleController",
    "ScheduleState",
    "ScheduleStatus",
]
