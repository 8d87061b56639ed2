"""Tests for the dashboard facade and the Send Now flow."""

import asyncio

import pytest
from fakes import AGENT_ID, SCHEDULE_ID, FakeAgentClient, FakeSchedulerClient, make_log

from newsdesk.client.protocols import InvocationResult
from newsdesk.dashboard import (
    MISSING_RECIPIENT_MESSAGE,
    SEND_FAILED_MESSAGE,
    SEND_SUCCESS_MESSAGE,
    DigestDashboard,
    build_digest_prompt,
)
from newsdesk.digests.samples import SAMPLE_DIGESTS
from newsdesk.digests.types import DigestSource
from newsdesk.recipients import MemorySlot
from newsdesk.scheduling import ScheduleStatus

RECIPIENT = "me@example.com"


@pytest.fixture
def make_dashboard(config, scheduler, agent):
    def factory(recipient: str | None = RECIPIENT, agent_client=None) -> DigestDashboard:
        return DigestDashboard(
            config, agent_client or agent, scheduler, MemorySlot(recipient)
        )

    return factory


class TestLifecycle:
    @pytest.mark.asyncio
    async def test_start_loads_everything(self, make_dashboard, scheduler):
        scheduler.executions = [make_log("e1", "2026-02-23T08:00:00Z")]
        dashboard = make_dashboard()

        await dashboard.start()
        await asyncio.sleep(0.01)

        assert dashboard.recipient == RECIPIENT
        assert dashboard.schedule_status is ScheduleStatus.ACTIVE
        assert dashboard.schedule.id == SCHEDULE_ID
        assert [d.id for d in dashboard.digests] == ["e1"]
        assert dashboard.history_error is None
        await dashboard.stop()

    @pytest.mark.asyncio
    async def test_start_without_polling(self, make_dashboard, scheduler):
        dashboard = make_dashboard()
        await dashboard.start(poll=False)

        assert dashboard.recipient == RECIPIENT
        assert scheduler.calls == []
        await dashboard.stop()

    @pytest.mark.asyncio
    async def test_history_error_surfaces(self, make_dashboard, scheduler):
        scheduler.logs_success = False
        dashboard = make_dashboard()
        await dashboard.start(poll=False)

        await dashboard.refresh()

        assert dashboard.history_error == "Failed to load digest history"
        await dashboard.stop()

    @pytest.mark.asyncio
    async def test_sample_data_toggle(self, make_dashboard, scheduler):
        scheduler.executions = [make_log("e1", "2026-02-23T08:00:00Z")]
        dashboard = make_dashboard()
        await dashboard.start(poll=False)
        await dashboard.refresh()

        dashboard.show_sample_data = True
        assert dashboard.digests == SAMPLE_DIGESTS

        dashboard.show_sample_data = False
        assert [d.id for d in dashboard.digests] == ["e1"]
        await dashboard.stop()

    @pytest.mark.asyncio
    async def test_schedule_listing_after_stop_is_discarded(
        self, make_dashboard, scheduler
    ):
        dashboard = make_dashboard()
        scheduler.list_gate = asyncio.Event()

        starting = asyncio.create_task(dashboard.start())
        await asyncio.sleep(0.01)
        await dashboard.stop()

        calls: list[int] = []
        dashboard.add_listener(lambda: calls.append(1))
        scheduler.list_gate.set()
        await starting

        assert dashboard.schedule is None
        assert dashboard.schedule_status is ScheduleStatus.UNKNOWN
        assert calls == []


class TestSendNow:
    @pytest.mark.asyncio
    async def test_requires_recipient(self, make_dashboard, agent):
        dashboard = make_dashboard(recipient=None)
        await dashboard.start(poll=False)

        assert await dashboard.send_now() is None

        assert dashboard.send_error == MISSING_RECIPIENT_MESSAGE
        assert agent.calls == []
        await dashboard.stop()

    @pytest.mark.asyncio
    async def test_success_inserts_manual_entry(self, make_dashboard, agent):
        dashboard = make_dashboard()
        await dashboard.start(poll=False)

        entry = await dashboard.send_now()

        assert entry is not None
        assert entry.source is DigestSource.MANUAL
        assert entry.subject == "Manual digest"
        assert entry.stories_count == 3
        assert entry.recipient == RECIPIENT
        assert dashboard.digests[0] == entry
        assert dashboard.send_success == SEND_SUCCESS_MESSAGE
        assert dashboard.send_error is None
        assert agent.calls == [(build_digest_prompt(RECIPIENT), AGENT_ID)]
        assert RECIPIENT in agent.calls[0][0]
        await dashboard.stop()

    @pytest.mark.asyncio
    async def test_messages_expire(self, make_dashboard):
        dashboard = make_dashboard()
        await dashboard.start(poll=False)
        await dashboard.send_now()

        await asyncio.sleep(0.1)

        assert dashboard.send_success is None
        await dashboard.stop()

    @pytest.mark.asyncio
    async def test_manual_entry_survives_polling(self, make_dashboard, scheduler):
        dashboard = make_dashboard()
        await dashboard.start(poll=False)
        entry = await dashboard.send_now()

        scheduler.executions = [make_log("e1", "2026-02-23T08:00:00Z")]
        await dashboard.refresh()
        await dashboard.refresh()

        assert entry in dashboard.digests
        assert len(dashboard.digests) == 2
        await dashboard.stop()

    @pytest.mark.asyncio
    async def test_remote_failure_message(self, make_dashboard):
        agent = FakeAgentClient(InvocationResult(success=False, error="quota exceeded"))
        dashboard = make_dashboard(agent_client=agent)
        await dashboard.start(poll=False)

        assert await dashboard.send_now() is None

        assert dashboard.send_error == "quota exceeded"
        assert len(dashboard.feed) == 0
        await dashboard.stop()

    @pytest.mark.asyncio
    async def test_failure_without_detail_uses_generic_message(self, make_dashboard):
        agent = FakeAgentClient(InvocationResult(success=False))
        dashboard = make_dashboard(agent_client=agent)
        await dashboard.start(poll=False)

        await dashboard.send_now()

        assert dashboard.send_error == SEND_FAILED_MESSAGE
        await dashboard.stop()

    @pytest.mark.asyncio
    async def test_exception_is_absorbed(self, make_dashboard, agent):
        agent.error = ConnectionError("offline")
        dashboard = make_dashboard()
        await dashboard.start(poll=False)

        assert await dashboard.send_now() is None

        assert dashboard.send_error == SEND_FAILED_MESSAGE
        assert dashboard.is_sending is False
        assert dashboard.active_agent_id is None
        await dashboard.stop()

    @pytest.mark.asyncio
    async def test_busy_guard(self, make_dashboard, agent):
        agent.gate = asyncio.Event()
        dashboard = make_dashboard()
        await dashboard.start(poll=False)

        first = asyncio.create_task(dashboard.send_now())
        await asyncio.sleep(0)
        assert dashboard.is_sending is True
        assert dashboard.active_agent_id == AGENT_ID

        assert await dashboard.send_now() is None
        agent.gate.set()
        assert await first is not None

        assert len(agent.calls) == 1
        assert dashboard.is_sending is False
        assert dashboard.active_agent_id is None
        await dashboard.stop()

    @pytest.mark.asyncio
    async def test_result_after_stop_is_discarded(self, make_dashboard, agent):
        agent.gate = asyncio.Event()
        dashboard = make_dashboard()
        await dashboard.start(poll=False)

        pending = asyncio.create_task(dashboard.send_now())
        await asyncio.sleep(0)
        await dashboard.stop()
        agent.gate.set()

        assert await pending is None
        assert len(dashboard.feed) == 0
        assert dashboard.send_success is None


class TestScheduleToggle:
    @pytest.mark.asyncio
    async def test_toggle_pauses_and_resumes(self, make_dashboard, scheduler):
        dashboard = make_dashboard()
        await dashboard.start()

        assert await dashboard.toggle_schedule() is True
        assert dashboard.schedule_status is ScheduleStatus.PAUSED

        assert await dashboard.toggle_schedule() is True
        assert dashboard.schedule_status is ScheduleStatus.ACTIVE
        await dashboard.stop()

    @pytest.mark.asyncio
    async def test_listeners_fire_on_changes(self, make_dashboard):
        dashboard = make_dashboard()
        changes: list[None] = []
        dashboard.add_listener(lambda: changes.append(None))

        await dashboard.start()
        before = len(changes)
        dashboard.save_email("new@example.com")

        assert len(changes) > before
        assert dashboard.recipient == "new@example.com"
        await dashboard.stop()

    @pytest.mark.asyncio
    async def test_unknown_schedule_cannot_toggle(self, config, agent):
        scheduler = FakeSchedulerClient([])
        dashboard = DigestDashboard(config, agent, scheduler, MemorySlot(RECIPIENT))
        await dashboard.start()

        assert dashboard.schedule_status is ScheduleStatus.UNKNOWN
        assert await dashboard.toggle_schedule() is False
        await dashboard.stop()
