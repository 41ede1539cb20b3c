"""Tests for the audit log query handler and view model."""

import asyncio
import json
from datetime import UTC, datetime
from unittest.mock import AsyncMock

import pytest

from promissio.core.errors import ApplicationError, NotFoundError, ValidationError
from promissio.modules.audit.application.dtos.audit_log_filter_dto import (
    AuditLogFilterDTO,
)
from promissio.modules.audit.application.queries.get_audit_logs_query import (
    GetAuditLogsQuery,
    GetAuditLogsQueryHandler,
)
from promissio.modules.audit.domain.enums import ActionCategory
from promissio.modules.audit.presentation.audit_log_view import (
    EMPTY_LOG_MESSAGE,
    AuditLogView,
    OverlayState,
)


@pytest.fixture
def audit_source():
    return AsyncMock()


@pytest.fixture
def view(audit_source):
    return AuditLogView(GetAuditLogsQueryHandler(audit_source))


class TestGetAuditLogsQueryHandler:
    """Forwarding filters to the audit source."""

    @pytest.mark.asyncio
    async def test_forwards_filters_and_keeps_source_order(self, audit_source, make_entry):
        entries = [make_entry("log-2"), make_entry("log-1")]
        audit_source.fetch_audit_logs.return_value = entries
        filters = AuditLogFilterDTO(action="Created")

        result = await GetAuditLogsQueryHandler(audit_source).execute(
            GetAuditLogsQuery(filters)
        )

        audit_source.fetch_audit_logs.assert_awaited_once_with(filters)
        assert result == entries

    @pytest.mark.asyncio
    async def test_inverted_range_is_rejected_before_fetching(self, audit_source):
        filters = AuditLogFilterDTO(
            start_date=datetime(2025, 3, 2, tzinfo=UTC),
            end_date=datetime(2025, 3, 1, tzinfo=UTC),
        )

        with pytest.raises(ValidationError):
            await GetAuditLogsQueryHandler(audit_source).execute(GetAuditLogsQuery(filters))

        audit_source.fetch_audit_logs.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_rejects_foreign_query_type(self, audit_source):
        from promissio.modules.notification.application.queries.get_contract_notifications_query import (  # noqa: E501
            GetContractNotificationsQuery,
        )

        with pytest.raises(ApplicationError):
            await GetAuditLogsQueryHandler(audit_source).execute(
                GetContractNotificationsQuery()
            )

        audit_source.fetch_audit_logs.assert_not_awaited()

    def test_query_is_immutable(self):
        query = GetAuditLogsQuery()

        with pytest.raises(AttributeError):
            query.filters = AuditLogFilterDTO(action="x")


class TestAuditLogRows:
    """List rendering."""

    @pytest.mark.asyncio
    async def test_row_fields(self, view, audit_source, make_entry, jane):
        audit_source.fetch_audit_logs.return_value = [
            make_entry(
                "log-1",
                action="Contract Created",
                user=jane,
                entity_type="contract",
                entity_id="3f2a9c1e-aaaa-bbbb",
                ip_address="10.0.0.1",
                created_at=datetime(2025, 3, 5, 14, 30, 12, tzinfo=UTC),
            )
        ]

        await view.load()
        row = view.rows()[0]

        assert row.initials == "JD"
        assert row.action == "Contract Created"
        assert row.category is ActionCategory.CREATED
        assert row.color == "green"
        assert row.actor_name == "Jane Doe"
        assert row.entity_id == "3f2a9c1e..."
        assert row.ip_address == "10.0.0.1"
        assert row.timestamp == "Mar 05, 2025 14:30"
        assert row.summary == "Jane Doe performed action on contract (ID: 3f2a9c1e...)"

    @pytest.mark.asyncio
    async def test_system_row(self, view, audit_source, make_entry):
        audit_source.fetch_audit_logs.return_value = [
            make_entry(action="Royalty Statement Generated")
        ]

        await view.load()
        row = view.rows()[0]

        assert row.initials == "?"
        assert row.actor_name == "System"
        assert row.entity_id is None
        assert row.color == "gray"
        assert row.summary == "System"

    @pytest.mark.asyncio
    async def test_empty_result(self, view, audit_source):
        audit_source.fetch_audit_logs.return_value = []

        await view.load(AuditLogFilterDTO(action="Nothing"))

        assert view.is_empty is True
        assert view.rows() == []
        assert view.empty_message == EMPTY_LOG_MESSAGE

    @pytest.mark.asyncio
    async def test_fetch_failure_propagates(self, view, audit_source):
        audit_source.fetch_audit_logs.side_effect = RuntimeError("unavailable")

        with pytest.raises(RuntimeError):
            await view.load()

        assert view.entries == []

    @pytest.mark.asyncio
    async def test_rejected_filters_leave_previous_result(self, view, audit_source, make_entry):
        applied = AuditLogFilterDTO(action="Created")
        audit_source.fetch_audit_logs.return_value = [make_entry("log-1")]
        await view.load(applied)

        with pytest.raises(ValidationError):
            await view.load(
                AuditLogFilterDTO(
                    start_date=datetime(2025, 3, 2, tzinfo=UTC),
                    end_date=datetime(2025, 3, 1, tzinfo=UTC),
                )
            )

        assert view.filters == applied
        assert [entry.id for entry in view.entries] == ["log-1"]


class TestAuditLogOverlay:
    """Closed/Open overlay state machine."""

    @pytest.fixture
    def entries(self, make_entry, jane):
        return [
            make_entry(
                "log-1",
                user=jane,
                entity_type="contract",
                entity_id="3f2a9c1e-aaaa-bbbb",
                previous_values={"status": "Pending"},
                new_values={"status": "Active", "endDate": "2025-12-31"},
                ip_address="10.0.0.1",
                user_agent="Mozilla/5.0",
                created_at=datetime(2025, 3, 5, 14, 30, 12, tzinfo=UTC),
            ),
            make_entry("log-2", action="Royalty Statement Generated", previous_values={}),
        ]

    @pytest.mark.asyncio
    async def test_nothing_selected_by_default(self, view, audit_source, entries):
        audit_source.fetch_audit_logs.return_value = entries

        await view.load()

        assert view.state is OverlayState.CLOSED
        assert view.selected is None
        with pytest.raises(ApplicationError):
            view.detail()

    @pytest.mark.asyncio
    async def test_select_shows_full_detail(self, view, audit_source, entries):
        audit_source.fetch_audit_logs.return_value = entries
        await view.load()

        detail = view.select("log-1")

        assert view.state is OverlayState.OPEN
        assert detail.entity_id == "3f2a9c1e-aaaa-bbbb"
        assert detail.timestamp == "Mar 05, 2025 14:30:12"
        assert detail.actor_name == "Jane Doe"
        assert detail.previous_values == json.dumps({"status": "Pending"}, indent=2)
        assert json.loads(detail.new_values) == {"status": "Active", "endDate": "2025-12-31"}
        assert detail.user_agent == "Mozilla/5.0"
        assert view.detail() == detail

    @pytest.mark.asyncio
    async def test_placeholders_for_absent_fields(self, view, audit_source, entries):
        audit_source.fetch_audit_logs.return_value = entries
        await view.load()

        detail = view.select("log-2")

        assert detail.actor_name == "System"
        assert detail.entity_type == "-"
        assert detail.entity_id == "-"
        assert detail.ip_address == "-"
        assert detail.previous_values is None
        assert detail.new_values is None
        assert detail.user_agent is None

    @pytest.mark.asyncio
    async def test_dismiss_closes(self, view, audit_source, entries):
        audit_source.fetch_audit_logs.return_value = entries
        await view.load()
        view.select("log-1")

        view.dismiss()

        assert view.state is OverlayState.CLOSED
        assert view.selected is None

    @pytest.mark.asyncio
    async def test_selecting_another_entry_moves_selection(self, view, audit_source, entries):
        audit_source.fetch_audit_logs.return_value = entries
        await view.load()
        view.select("log-1")

        view.select("log-2")

        assert view.selected.id == "log-2"
        assert view.state is OverlayState.OPEN

    @pytest.mark.asyncio
    async def test_unknown_entry(self, view, audit_source, entries):
        audit_source.fetch_audit_logs.return_value = entries
        await view.load()

        with pytest.raises(NotFoundError):
            view.select("log-99")

        assert view.state is OverlayState.CLOSED

    @pytest.mark.asyncio
    async def test_reload_drops_selection_missing_from_result(
        self, view, audit_source, entries
    ):
        audit_source.fetch_audit_logs.return_value = entries
        await view.load()
        view.select("log-1")

        audit_source.fetch_audit_logs.return_value = entries[1:]
        await view.load(AuditLogFilterDTO(action="Generated"))

        assert view.state is OverlayState.CLOSED

    @pytest.mark.asyncio
    async def test_reload_keeps_selection_still_in_result(self, view, audit_source, entries):
        audit_source.fetch_audit_logs.return_value = entries
        await view.load()
        view.select("log-2")

        await view.load()

        assert view.selected.id == "log-2"


class TestSupersededLoads:
    """A newer load wins over an older one still in flight."""

    @pytest.mark.asyncio
    async def test_late_result_is_discarded(self, make_entry):
        release_first = asyncio.Event()
        first_entries = [make_entry("log-old")]
        second_entries = [make_entry("log-new")]

        async def fetch(filters):
            if filters.action == "first":
                await release_first.wait()
                return first_entries
            return second_entries

        source = AsyncMock()
        source.fetch_audit_logs.side_effect = fetch
        view = AuditLogView(GetAuditLogsQueryHandler(source))

        first = asyncio.create_task(view.load(AuditLogFilterDTO(action="first")))
        await asyncio.sleep(0)
        await view.load(AuditLogFilterDTO(action="second"))
        release_first.set()
        await first

        assert [entry.id for entry in view.entries] == ["log-new"]
        assert view.filters.action == "second"
