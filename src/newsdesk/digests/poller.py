"""Execution log poller that keeps the feed's scheduled entries current.

The poller owns the timer. All feed state is delegated to FeedReconciler.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from newsdesk.digests.feed import FeedReconciler

if TYPE_CHECKING:
    from newsdesk.client.protocols import SchedulerClient

logger = logging.getLogger(__name__)

HISTORY_ERROR_MESSAGE = "Failed to load digest history"


class PollingLoop:
    """Polls the schedule execution log on a fixed cadence.

    The first iteration of the loop is the initial load. refresh() runs the
    same fetch out-of-band without moving the next tick. Overlapping fetches
    are allowed; the feed's full-replacement merge makes their arrival order
    irrelevant.

    Example:
        poller = PollingLoop(client, feed, schedule_id)
        await poller.start()
        ...
        await poller.refresh()
        await poller.stop()
    """

    def __init__(
        self,
        client: SchedulerClient,
        feed: FeedReconciler,
        schedule_id: str,
        poll_interval: float = 60.0,
        history_limit: int = 50,
    ) -> None:
        self._client = client
        self._feed = feed
        self._schedule_id = schedule_id
        self._poll_interval = poll_interval
        self._history_limit = history_limit
        self._running = False
        self._stopped = False
        self._task: asyncio.Task | None = None
        self._in_flight = 0
        self._poll_count = 0
        self._last_error: str | None = None
        self._last_success_at: datetime | None = None
        self._listeners: list[Callable[[], None]] = []

    @property
    def feed(self) -> FeedReconciler:
        return self._feed

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def is_loading(self) -> bool:
        return self._in_flight > 0

    @property
    def last_error(self) -> str | None:
        """History fetch error, kept until the next successful fetch."""
        return self._last_error

    @property
    def last_success_at(self) -> datetime | None:
        return self._last_success_at

    @property
    def poll_count(self) -> int:
        return self._poll_count

    def add_listener(self, listener: Callable[[], None]) -> None:
        self._listeners.append(listener)

    async def start(self) -> None:
        """Start the timer. A poller runs at most once; restarting is a no-op."""
        if self._running or self._stopped:
            return
        self._running = True
        logger.info(
            "digest_poller_started",
            extra={
                "schedule.id": self._schedule_id,
                "poll.interval": self._poll_interval,
            },
        )
        self._task = asyncio.create_task(self._poll_loop())

    async def stop(self) -> None:
        """Cancel the timer; results of fetches still in flight are dropped."""
        self._stopped = True
        if not self._running:
            return
        self._running = False
        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
        logger.info("digest_poller_stopped", extra={"poll.count": self._poll_count})

    async def refresh(self) -> bool:
        """Fetch now, outside the timer. Returns True if the feed was updated."""
        return await self._fetch()

    async def _poll_loop(self) -> None:
        while self._running:
            try:
                self._poll_count += 1
                await self._fetch()
            except Exception as e:
                logger.error("digest_poll_error", extra={"error.message": str(e)})
            await asyncio.sleep(self._poll_interval)

    async def _fetch(self) -> bool:
        if self._stopped:
            return False

        self._in_flight += 1
        self._notify()
        try:
            try:
                result = await self._client.get_schedule_logs(
                    self._schedule_id, limit=self._history_limit
                )
            except asyncio.CancelledError:
                raise
            except Exception as e:
                logger.error(
                    "digest_history_error",
                    extra={"schedule.id": self._schedule_id, "error.message": str(e)},
                )
                return self._fail()

            if self._stopped:
                logger.debug("digest_history_discarded")
                return False

            if not result.success:
                logger.warning(
                    "digest_history_failed",
                    extra={
                        "schedule.id": self._schedule_id,
                        "error.message": result.error,
                    },
                )
                return self._fail()

            try:
                self._feed.merge_executions(result.executions)
            except Exception as e:
                logger.error(
                    "digest_history_merge_error",
                    extra={"schedule.id": self._schedule_id, "error.message": str(e)},
                )
                return self._fail()

            self._last_error = None
            self._last_success_at = datetime.now(UTC)
            logger.debug(
                "digest_history_loaded",
                extra={
                    "schedule.id": self._schedule_id,
                    "history.executions": len(result.executions),
                    "feed.size": len(self._feed),
                },
            )
            return True
        finally:
            self._in_flight -= 1
            if not self._stopped:
                self._notify()

    def _fail(self) -> bool:
        if not self._stopped:
            self._last_error = HISTORY_ERROR_MESSAGE
        return False

    def _notify(self) -> None:
        for listener in self._listeners:
            listener()
