"""Tests for NotificationDeriver."""

from datetime import timedelta

import pytest

from promissio.core.errors import ValidationError
from promissio.modules.notification.domain.enums import NotificationKind
from promissio.modules.notification.domain.services.notification_deriver import (
    NotificationDeriver,
    derive_notifications,
)
from promissio.utils.date import start_of_day


def kinds(notifications):
    return [notification.kind for notification in notifications]


class TestExpiredAlerts:
    """Expired contracts inside the trailing window."""

    def test_recently_expired_contract_is_reported(self, make_contract, now):
        contract = make_contract(status="Expired", end_date=(now - timedelta(days=10)).date())

        notifications = derive_notifications([contract], now)

        assert kinds(notifications) == [NotificationKind.EXPIRED]
        notification = notifications[0]
        assert notification.title == "Contract Expired"
        assert notification.date == start_of_day(contract.end_date)
        assert notification.id == "expired-c-1"

    def test_expiry_older_than_window_is_ignored(self, make_contract, now):
        contract = make_contract(status="Expired", end_date=(now - timedelta(days=40)).date())

        assert derive_notifications([contract], now) == []

    def test_expiry_on_window_edge_day_is_dropped_after_midnight(self, make_contract, now):
        contract = make_contract(status="Expired", end_date=(now - timedelta(days=30)).date())

        assert derive_notifications([contract], now) == []

    def test_expiry_on_window_edge_day_is_reported_at_midnight(self, make_contract, now):
        midnight = now.replace(hour=0)
        contract = make_contract(
            status="Expired", end_date=(midnight - timedelta(days=30)).date()
        )

        assert kinds(derive_notifications([contract], midnight)) == [
            NotificationKind.EXPIRED
        ]

    def test_expiry_one_day_inside_window_is_reported(self, make_contract, now):
        contract = make_contract(status="Expired", end_date=(now - timedelta(days=29)).date())

        assert kinds(derive_notifications([contract], now)) == [NotificationKind.EXPIRED]

    def test_expired_status_without_end_date_is_ignored(self, make_contract, now):
        contract = make_contract(status="Expired", end_date=None)

        assert derive_notifications([contract], now) == []

    def test_active_contract_past_end_date_is_not_expired(self, make_contract, now):
        contract = make_contract(status="Active", end_date=(now - timedelta(days=3)).date())

        assert derive_notifications([contract], now) == []


class TestExpiringAlerts:
    """Active contracts ending within the window."""

    def test_title_carries_day_count(self, make_contract, now):
        contract = make_contract(status="Active", end_date=(now + timedelta(days=5)).date())

        notifications = derive_notifications([contract], now)

        assert kinds(notifications) == [NotificationKind.EXPIRING]
        assert notifications[0].title == "Expiring in 5 days"
        assert "5" in notifications[0].title

    def test_end_date_beyond_window_is_ignored(self, make_contract, now):
        contract = make_contract(status="Active", end_date=(now + timedelta(days=31)).date())

        assert derive_notifications([contract], now) == []

    @pytest.mark.parametrize("days", [0, 30])
    def test_window_bounds_are_inclusive(self, make_contract, now, days):
        contract = make_contract(status="Active", end_date=(now + timedelta(days=days)).date())

        notifications = derive_notifications([contract], now)

        assert notifications[0].title == f"Expiring in {days} days"

    @pytest.mark.parametrize("status", ["Pending", "Draft", "Terminated", "Expired"])
    def test_only_active_contracts_expire_soon(self, make_contract, now, status):
        contract = make_contract(status=status, end_date=(now + timedelta(days=5)).date())

        assert NotificationKind.EXPIRING not in kinds(derive_notifications([contract], now))


class TestNewContractAlerts:
    """Recently created contracts, whatever their status."""

    @pytest.mark.parametrize("status", ["Active", "Pending", "Expired", "Draft", "Unknown"])
    def test_recent_creation_is_reported_for_any_status(self, make_contract, now, status):
        created_at = now - timedelta(days=1)
        contract = make_contract(status=status, created_at=created_at)

        notifications = [
            n for n in derive_notifications([contract], now) if n.kind == NotificationKind.NEW
        ]

        assert len(notifications) == 1
        assert notifications[0].title == "New Contract"
        assert notifications[0].date == created_at

    def test_old_creation_is_ignored(self, make_contract, now):
        contract = make_contract(created_at=now - timedelta(days=31))

        assert derive_notifications([contract], now) == []

    def test_description_includes_content_when_present(self, make_contract, now):
        with_content = make_contract(
            "c-1", created_at=now - timedelta(days=2), content="Summer Catalogue"
        )
        without_content = make_contract("c-2", created_at=now - timedelta(days=3))

        descriptions = [n.description for n in derive_notifications([with_content, without_content], now)]

        assert descriptions == ["Acme Films - Summer Catalogue", "Acme Films"]


class TestMergeAndOrdering:
    """Sorting, truncation and purity of the merged feed."""

    def test_one_contract_can_raise_several_alerts(self, make_contract, now):
        contract = make_contract(
            status="Active",
            end_date=(now + timedelta(days=7)).date(),
            created_at=now - timedelta(days=2),
        )

        notifications = derive_notifications([contract], now)

        assert kinds(notifications) == [NotificationKind.EXPIRING, NotificationKind.NEW]
        assert {n.id for n in notifications} == {"expiring-c-1", "new-c-1"}

    def test_result_is_capped_and_sorted_newest_first(self, make_contract, now):
        contracts = [
            make_contract(f"c-{i}", created_at=now - timedelta(days=i, hours=1))
            for i in range(15)
        ]

        notifications = derive_notifications(contracts, now)

        assert len(notifications) == 10
        dates = [n.date for n in notifications]
        assert dates == sorted(dates, reverse=True)
        assert notifications[0].contract_id == "c-0"

    def test_ties_keep_emission_order(self, make_contract, now):
        created_at = now - timedelta(days=4)
        contracts = [make_contract(f"c-{i}", created_at=created_at) for i in range(3)]

        notifications = derive_notifications(contracts, now)

        assert [n.contract_id for n in notifications] == ["c-0", "c-1", "c-2"]

    def test_derivation_is_repeatable(self, make_contract, now):
        contracts = [
            make_contract("c-1", status="Expired", end_date=(now - timedelta(days=2)).date()),
            make_contract("c-2", status="Active", end_date=(now + timedelta(days=9)).date()),
            make_contract("c-3", created_at=now - timedelta(hours=5)),
        ]

        assert derive_notifications(contracts, now) == derive_notifications(contracts, now)

    def test_empty_collection_yields_empty_feed(self, now):
        assert derive_notifications([], now) == []


class TestDeriverConfiguration:
    """Custom window and limit."""

    def test_custom_limit(self, make_contract, now):
        contracts = [make_contract(f"c-{i}", created_at=now - timedelta(days=i)) for i in range(5)]

        assert len(NotificationDeriver(limit=3).derive(contracts, now)) == 3

    def test_custom_window(self, make_contract, now):
        contract = make_contract(status="Active", end_date=(now + timedelta(days=10)).date())

        assert NotificationDeriver(window_days=7).derive([contract], now) == []

    def test_rejects_invalid_bounds(self):
        with pytest.raises(ValidationError):
            NotificationDeriver(window_days=-1)

        with pytest.raises(ValidationError):
            NotificationDeriver(limit=0)
