"""Tests for cost models, the ledger and the session."""

from unittest.mock import MagicMock

import pytest

from cost_allocator.clients.exchange_rate_client import ExchangeRateError
from cost_allocator.cost.allocation import total_cost
from cost_allocator.cost.ledger import CostLedger
from cost_allocator.cost.models import (
    AllocationMode,
    AllocationSettings,
    ByPercentage,
    ByUserCount,
    CostEntry,
    Currency,
)
from cost_allocator.session import CostSession


class TestCurrency:
    """Tests for Currency parsing."""

    def test_parse_case_insensitive(self):
        assert Currency.parse(" usd ") is Currency.USD
        assert Currency.parse("BRL") is Currency.BRL
        assert Currency.parse(Currency.USD) is Currency.USD

    def test_parse_unknown(self):
        with pytest.raises(ValueError):
            Currency.parse("EUR")


class TestCostEntry:
    """Tests for CostEntry."""

    def test_from_dict_defaults(self):
        """Missing fields get an id, a zero amount and BRL."""
        entry = CostEntry.from_dict({"name": "VPS"})

        assert entry.id
        assert entry.name == "VPS"
        assert entry.amount == 0.0
        assert entry.currency is Currency.BRL

    def test_from_dict_coerces_amount(self):
        entry = CostEntry.from_dict({"id": "x", "name": "VPS", "amount": "109,99", "currency": "usd"})

        assert entry.amount == pytest.approx(109.99)
        assert entry.currency is Currency.USD

    def test_to_dict(self):
        entry = CostEntry(id="1", name="Railway", amount=20.0, currency=Currency.USD)
        assert entry.to_dict() == {"id": "1", "name": "Railway", "amount": 20.0, "currency": "USD"}


class TestAllocationSettings:
    """Tests for AllocationSettings."""

    def test_active_variant(self):
        settings = AllocationSettings(mode=AllocationMode.USERS, target_users=50, target_percentage=8)
        assert settings.active() == ByUserCount(target_users=50)

        settings.mode = AllocationMode.PERCENTAGE
        assert settings.active() == ByPercentage(target_percentage=8)

    def test_from_dict(self):
        settings = AllocationSettings.from_dict({"mode": "users", "target_users": "25"})

        assert settings.mode is AllocationMode.USERS
        assert settings.target_users == 25
        assert settings.target_percentage == 8.0

    def test_from_dict_invalid_mode(self):
        with pytest.raises(ValueError):
            AllocationSettings.from_dict({"mode": "per-seat"})

    def test_from_dict_non_finite_targets_use_defaults(self):
        settings = AllocationSettings.from_dict({"target_users": float("inf"), "target_percentage": "nan"})

        assert settings.target_users == 50
        assert settings.target_percentage == 8.0


class TestCostLedger:
    """Tests for CostLedger."""

    def test_add_defaults(self):
        """New entries get placeholder values and a fresh id."""
        ledger = CostLedger()
        entry = ledger.add()

        assert entry.name == "New Cost"
        assert entry.amount == 0.0
        assert entry.currency is Currency.BRL
        assert len(ledger) == 1

    def test_add_unique_ids(self):
        ledger = CostLedger()
        ids = {ledger.add().id for _ in range(50)}
        assert len(ids) == 50

    def test_insertion_order(self):
        ledger = CostLedger()
        names = ["a", "b", "c"]
        for name in names:
            ledger.add(name=name)
        assert [e.name for e in ledger] == names

    def test_duplicate_ids_rekeyed(self):
        """Starting entries with a repeated id are stored under fresh ids."""
        ledger = CostLedger([
            CostEntry(id="1", name="a", amount=1.0),
            CostEntry(id="1", name="b", amount=2.0),
        ])

        ids = [e.id for e in ledger.entries]
        assert ids[0] == "1"
        assert ids[1] != "1"

    def test_update_fields(self):
        """Fields are coerced to their types on update."""
        ledger = CostLedger()
        entry = ledger.add()

        assert ledger.update(entry.id, "name", "Railway") is True
        assert ledger.update(entry.id, "amount", "20") is True
        assert ledger.update(entry.id, "currency", "USD") is True

        updated = ledger.get(entry.id)
        assert updated.name == "Railway"
        assert updated.amount == 20.0
        assert updated.currency is Currency.USD

    def test_update_keeps_position(self):
        ledger = CostLedger()
        first = ledger.add(name="first")
        ledger.add(name="second")

        ledger.update(first.id, "name", "renamed")
        assert [e.name for e in ledger] == ["renamed", "second"]

    def test_update_unknown_id_is_noop(self):
        """Updating an unknown id leaves the ledger unchanged."""
        ledger = CostLedger()
        ledger.add(name="VPS", amount=10)
        before = ledger.entries

        assert ledger.update("missing", "amount", 99) is False
        assert ledger.entries == before

    def test_update_unknown_field_raises(self):
        ledger = CostLedger()
        entry = ledger.add()

        with pytest.raises(ValueError):
            ledger.update(entry.id, "id", "other")

    def test_remove(self):
        ledger = CostLedger()
        entry = ledger.add()

        assert ledger.remove(entry.id) is True
        assert len(ledger) == 0
        assert ledger.get(entry.id) is None

    def test_remove_unknown_id_is_noop(self):
        ledger = CostLedger()
        ledger.add()

        assert ledger.remove("missing") is False
        assert len(ledger) == 1

    def test_add_then_remove_restores_total(self):
        """Adding and removing an entry returns to the prior total."""
        ledger = CostLedger()
        ledger.add(amount=20, currency=Currency.USD)
        ledger.add(amount=109.99)
        before = total_cost(ledger.entries, 5.5)

        entry = ledger.add(amount=42, currency="USD")
        assert total_cost(ledger.entries, 5.5) != pytest.approx(before)

        ledger.remove(entry.id)
        assert total_cost(ledger.entries, 5.5) == pytest.approx(before)

    def test_entries_is_snapshot(self):
        """Mutating the ledger does not change an earlier snapshot."""
        ledger = CostLedger()
        ledger.add()
        snapshot = ledger.entries

        ledger.add()
        assert len(snapshot) == 1

    def test_clear(self):
        ledger = CostLedger()
        ledger.add()
        ledger.clear()
        assert len(ledger) == 0


class TestCostSession:
    """Tests for CostSession."""

    def test_from_config(self):
        """Session is seeded with the configured costs, rate and targets."""
        config = {
            "exchange_rate": {"default": 5.0},
            "allocation": {"mode": "users", "target_users": 10, "target_percentage": 5},
            "costs": [{"name": "Railway", "amount": 20, "currency": "USD"}],
        }

        session = CostSession.from_config(config)
        result = session.calculate()

        assert session.exchange_rate == 5.0
        assert result.total == pytest.approx(100.0)
        assert result.per_user_cost == pytest.approx(10.0)

    def test_from_default_config(self):
        """Built-in defaults reproduce the example scenario."""
        result = CostSession.from_config().calculate()

        assert result.total == pytest.approx(329.99)
        assert result.per_user_cost == pytest.approx(26.3992)

    def test_mode_switch_keeps_targets(self):
        """Both targets survive switching back and forth."""
        session = CostSession()
        session.set_target_users(40)
        session.set_target_percentage(12.5)

        session.set_mode("users")
        assert session.settings.active() == ByUserCount(40)

        session.set_mode(AllocationMode.PERCENTAGE)
        assert session.settings.active() == ByPercentage(12.5)

        session.set_mode("users")
        assert session.settings.target_users == 40

    def test_set_exchange_rate_coerces(self):
        session = CostSession()
        session.set_exchange_rate("5,25")
        assert session.exchange_rate == 5.25

    def test_set_targets_ignore_non_finite(self):
        session = CostSession()
        session.set_target_users("inf")
        session.set_target_percentage("nan")

        assert session.settings.target_users == 0
        assert session.settings.target_percentage == 0.0

    def test_refresh_rate_success(self):
        session = CostSession(exchange_rate=5.50)
        client = MagicMock()
        client.fetch_rate.return_value = 4.97

        assert session.refresh_rate(client) is True
        assert session.exchange_rate == 4.97
        assert session.last_rate_error is None

    def test_refresh_rate_failure_keeps_rate(self):
        """A failed fetch leaves the previous rate in place."""
        session = CostSession(exchange_rate=5.50)
        client = MagicMock()
        client.fetch_rate.side_effect = ExchangeRateError("service down")

        assert session.refresh_rate(client) is False
        assert session.exchange_rate == 5.50
        assert session.last_rate_error == "service down"

    def test_recalculates_after_changes(self):
        """Each calculate call reflects the current state."""
        session = CostSession(exchange_rate=5.0)
        entry = session.ledger.add(amount=10, currency=Currency.USD)
        assert session.calculate().total == pytest.approx(50.0)

        session.ledger.update(entry.id, "currency", "BRL")
        assert session.calculate().total == pytest.approx(10.0)
