"""Schedule controller: active/paused toggle with read-after-write.

The pause/resume endpoints acknowledge a request but their answer is not
treated as the new state. After every mutation the controller re-lists the
schedules and adopts whatever the listing reports.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from newsdesk.scheduling.types import ScheduleState, ScheduleStatus

if TYPE_CHECKING:
    from newsdesk.client.protocols import SchedulerClient

logger = logging.getLogger(__name__)


class ScheduleController:
    """Tracks one remote schedule and toggles it.

    Example:
        controller = ScheduleController(client, agent_id, schedule_id)
        await controller.refresh()
        if controller.status is ScheduleStatus.ACTIVE:
            await controller.toggle()  # pause, then re-list
    """

    def __init__(
        self,
        client: SchedulerClient,
        agent_id: str,
        schedule_id: str,
        fallback_to_first: bool = True,
    ) -> None:
        self._client = client
        self._agent_id = agent_id
        self._schedule_id = schedule_id
        self._fallback_to_first = fallback_to_first
        self._state: ScheduleState | None = None
        self._using_fallback = False
        self._busy = False
        self._closed = False
        self._listeners: list[Callable[[], None]] = []

    @property
    def state(self) -> ScheduleState | None:
        return self._state

    @property
    def status(self) -> ScheduleStatus:
        if self._state is None:
            return ScheduleStatus.UNKNOWN
        return self._state.status

    @property
    def next_run_time(self) -> str | None:
        return self._state.next_run_time if self._state else None

    @property
    def is_busy(self) -> bool:
        return self._busy

    @property
    def using_fallback(self) -> bool:
        """True when the tracked schedule is not the configured one."""
        return self._using_fallback

    def add_listener(self, listener: Callable[[], None]) -> None:
        self._listeners.append(listener)

    def close(self) -> None:
        """Stop adopting listings; responses still in flight are dropped."""
        self._closed = True

    async def refresh(self) -> ScheduleStatus:
        """Re-list schedules and adopt the tracked one's state.

        A failed listing keeps the last known state. A successful listing
        without a usable schedule resets to unknown.
        """
        if self._closed:
            return self.status
        try:
            result = await self._client.list_schedules(self._agent_id)
        except Exception as e:
            logger.error(
                "schedule_refresh_error",
                extra={"schedule.id": self._schedule_id, "error.message": str(e)},
            )
            return self.status

        if self._closed:
            logger.debug(
                "schedule_refresh_discarded", extra={"schedule.id": self._schedule_id}
            )
            return self.status

        if not result.success:
            logger.warning(
                "schedule_refresh_failed",
                extra={"schedule.id": self._schedule_id, "error.message": result.error},
            )
            return self.status

        self._adopt(result.schedules)
        return self.status

    async def toggle(self) -> bool:
        """Pause an active schedule or resume a paused one.

        Returns:
            False when the toggle was refused (controller closed, state
            unknown or a toggle already in flight), True once the mutation and re-list ran.
        """
        if self._closed or self._busy or self._state is None:
            logger.debug(
                "schedule_toggle_ignored",
                extra={"schedule.busy": self._busy, "schedule.status": self.status},
            )
            return False

        self._busy = True
        self._notify()
        target = self._state
        action = "pause" if target.is_active else "resume"
        try:
            try:
                if target.is_active:
                    ack = await self._client.pause_schedule(target.id)
                else:
                    ack = await self._client.resume_schedule(target.id)
                logger.info(
                    "schedule_toggle_sent",
                    extra={
                        "schedule.id": target.id,
                        "schedule.action": action,
                        "schedule.ack": ack.success,
                    },
                )
            except Exception as e:
                logger.error(
                    "schedule_toggle_error",
                    extra={
                        "schedule.id": target.id,
                        "schedule.action": action,
                        "error.message": str(e),
                    },
                )
            # Only a fresh listing is authoritative, whatever the ack said
            await self.refresh()
        finally:
            self._busy = False
            self._notify()
        return True

    def _adopt(self, schedules: list[ScheduleState]) -> None:
        found = next((s for s in schedules if s.id == self._schedule_id), None)
        using_fallback = False
        if found is None and schedules and self._fallback_to_first:
            found = schedules[0]
            using_fallback = True
            logger.warning(
                "schedule_fallback_used",
                extra={
                    "schedule.expected_id": self._schedule_id,
                    "schedule.id": found.id,
                },
            )
        elif found is None:
            logger.warning(
                "schedule_not_found",
                extra={
                    "schedule.expected_id": self._schedule_id,
                    "schedule.count": len(schedules),
                },
            )

        self._state = found
        self._using_fallback = using_fallback
        self._notify()

    def _notify(self) -> None:
        if self._closed:
            return
        for listener in self._listeners:
            listener()
