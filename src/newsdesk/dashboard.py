"""Digest dashboard: the state and triggers a presentation layer binds to.

The dashboard wires the feed, the poller, the schedule controller and the
recipient store together, and adds the operator-facing bits that belong to
none of them: the Send Now flow, transient send messages, and the sample
data preview.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from newsdesk.config.models import NewsdeskConfig
from newsdesk.digests.feed import FeedReconciler
from newsdesk.digests.normalizer import normalize_manual
from newsdesk.digests.poller import PollingLoop
from newsdesk.digests.samples import SAMPLE_DIGESTS
from newsdesk.digests.types import DigestEntry
from newsdesk.recipients.slots import KeyValueSlot
from newsdesk.recipients.store import EmailConfigStore
from newsdesk.scheduling.controller import ScheduleController
from newsdesk.scheduling.types import ScheduleState, ScheduleStatus

if TYPE_CHECKING:
    from newsdesk.client.protocols import AgentClient, SchedulerClient

logger = logging.getLogger(__name__)

MISSING_RECIPIENT_MESSAGE = "Please configure a recipient email first"
SEND_FAILED_MESSAGE = "Failed to send digest"
SEND_SUCCESS_MESSAGE = "Digest sent successfully"


def build_digest_prompt(recipient: str) -> str:
    return (
        "Search for the latest AI research breakthroughs, new papers, model "
        "releases, and industry developments. Then compose and send a curated "
        f"HTML email digest to {recipient}"
    )


class DigestDashboard:
    """Operator view over digests, schedule and recipient.

    Example:
        dashboard = DigestDashboard(config, client, client, JsonFileSlot(path))
        await dashboard.start()
        await dashboard.send_now()
        await dashboard.toggle_schedule()
        await dashboard.stop()
    """

    def __init__(
        self,
        config: NewsdeskConfig,
        agent_client: AgentClient,
        scheduler_client: SchedulerClient,
        slot: KeyValueSlot,
        feed: FeedReconciler | None = None,
    ) -> None:
        self._config = config
        self._agent_client = agent_client
        self._feed = feed if feed is not None else FeedReconciler()
        self._poller = PollingLoop(
            scheduler_client,
            self._feed,
            config.schedule.schedule_id,
            poll_interval=config.polling.interval_seconds,
            history_limit=config.polling.history_limit,
        )
        self._schedule = ScheduleController(
            scheduler_client,
            config.agents.manager,
            config.schedule.schedule_id,
            fallback_to_first=config.schedule.fallback_to_first,
        )
        self._recipients = EmailConfigStore(
            slot,
            confirmation_seconds=config.feedback.saved_confirmation_seconds,
        )
        self._alive = False
        self._is_sending = False
        self._active_agent_id: str | None = None
        self._send_error: str | None = None
        self._send_success: str | None = None
        self._message_timer: asyncio.TimerHandle | None = None
        self.show_sample_data = False
        self._listeners: list[Callable[[], None]] = []

        for component in (self._poller, self._schedule, self._recipients):
            component.add_listener(self._notify)

    # ------------------------------------------------------------------
    # State exposed to presentation
    # ------------------------------------------------------------------

    @property
    def feed(self) -> FeedReconciler:
        return self._feed

    @property
    def poller(self) -> PollingLoop:
        return self._poller

    @property
    def schedule_controller(self) -> ScheduleController:
        return self._schedule

    @property
    def recipients(self) -> EmailConfigStore:
        return self._recipients

    @property
    def digests(self) -> tuple[DigestEntry, ...]:
        if self.show_sample_data:
            return SAMPLE_DIGESTS
        return self._feed.entries

    @property
    def schedule(self) -> ScheduleState | None:
        return self._schedule.state

    @property
    def schedule_status(self) -> ScheduleStatus:
        return self._schedule.status

    @property
    def recipient(self) -> str | None:
        return self._recipients.recipient

    @property
    def is_sending(self) -> bool:
        return self._is_sending

    @property
    def active_agent_id(self) -> str | None:
        return self._active_agent_id

    @property
    def send_error(self) -> str | None:
        return self._send_error

    @property
    def send_success(self) -> str | None:
        return self._send_success

    @property
    def history_error(self) -> str | None:
        return self._poller.last_error

    @property
    def is_loading_history(self) -> bool:
        return self._poller.is_loading

    def add_listener(self, listener: Callable[[], None]) -> None:
        """Register a callback fired after any visible state change."""
        self._listeners.append(listener)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def start(self, poll: bool = True) -> None:
        """Mount: load the recipient, read the schedule, start polling.

        With poll=False only the recipient is loaded, for one-shot commands
        that drive the triggers themselves.
        """
        if self._alive:
            return
        self._alive = True
        self._recipients.load()
        if poll:
            await self._poller.start()
            await self._schedule.refresh()

    async def stop(self) -> None:
        """Teardown: stop polling and cancel every pending timer."""
        self._alive = False
        await self._poller.stop()
        self._schedule.close()
        self._recipients.close()
        self._cancel_message_timer()

    # ------------------------------------------------------------------
    # Triggers
    # ------------------------------------------------------------------

    async def refresh(self) -> bool:
        return await self._poller.refresh()

    def save_email(self, candidate: str) -> bool:
        return self._recipients.save(candidate)

    async def toggle_schedule(self) -> bool:
        return await self._schedule.toggle()

    async def send_now(self) -> DigestEntry | None:
        """Invoke the manager agent and add the resulting digest to the feed.

        Returns:
            The new manual entry, or None if the send was refused or failed.
        """
        recipient = self._recipients.recipient
        if not recipient:
            self._set_messages(error=MISSING_RECIPIENT_MESSAGE)
            return None
        if self._is_sending:
            logger.debug("digest_send_ignored")
            return None

        agent_id = self._config.agents.manager
        self._is_sending = True
        self._active_agent_id = agent_id
        self._set_messages()
        try:
            try:
                result = await self._agent_client.invoke(
                    build_digest_prompt(recipient), agent_id
                )
            except asyncio.CancelledError:
                raise
            except Exception as e:
                logger.error("digest_send_error", extra={"error.message": str(e)})
                if self._alive:
                    self._set_messages(error=SEND_FAILED_MESSAGE)
                return None

            if not self._alive:
                logger.debug("digest_send_discarded")
                return None

            if not result.success:
                logger.warning("digest_send_failed", extra={"error.message": result.error})
                self._set_messages(error=result.error or SEND_FAILED_MESSAGE)
                return None

            entry = normalize_manual(result.response, recipient)
            self._feed.insert_manual(entry)
            logger.info(
                "digest_sent",
                extra={"digest.id": entry.id, "digest.stories": entry.stories_count},
            )
            self._set_messages(success=SEND_SUCCESS_MESSAGE)
            return entry
        finally:
            self._is_sending = False
            self._active_agent_id = None
            self._notify()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _set_messages(self, error: str | None = None, success: str | None = None) -> None:
        self._cancel_message_timer()
        self._send_error = error
        self._send_success = success
        if (error or success) and self._alive:
            loop = asyncio.get_running_loop()
            self._message_timer = loop.call_later(
                self._config.feedback.send_message_seconds, self._expire_messages
            )
        self._notify()

    def _expire_messages(self) -> None:
        self._message_timer = None
        self._send_error = None
        self._send_success = None
        self._notify()

    def _cancel_message_timer(self) -> None:
        if self._message_timer is not None:
            self._message_timer.cancel()
            self._message_timer = None

    def _notify(self) -> None:
        for listener in self._listeners:
            listener()
