"""Tests for configuration and formatting helpers."""

import logging

import pytest

from cost_allocator.utils.helpers import (
    DEFAULT_CONFIG,
    coerce_number,
    format_currency,
    format_percentage,
    load_config,
    setup_logging,
)


class TestLoadConfig:
    """Tests for load_config."""

    def test_partial_file_merged_over_defaults(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("exchange_rate:\n  default: 4.9\nallocation:\n  mode: users\n", encoding="utf-8")

        config = load_config(str(path))

        assert config["exchange_rate"]["default"] == 4.9
        assert config["exchange_rate"]["pair"] == "USD-BRL"
        assert config["allocation"]["mode"] == "users"
        assert config["allocation"]["target_users"] == 50

    def test_costs_list_replaced(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("costs:\n  - name: Domain\n    amount: 40\n", encoding="utf-8")

        config = load_config(str(path))
        assert config["costs"] == [{"name": "Domain", "amount": 40}]

    def test_empty_file_gives_defaults(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("", encoding="utf-8")

        assert load_config(str(path)) == DEFAULT_CONFIG

    def test_missing_explicit_path(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(str(tmp_path / "nope.yaml"))

    def test_non_mapping_file(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("- just\n- a list\n", encoding="utf-8")

        with pytest.raises(ValueError):
            load_config(str(path))

    def test_defaults_not_mutated(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("exchange_rate:\n  default: 1.0\n", encoding="utf-8")

        load_config(str(path))
        assert DEFAULT_CONFIG["exchange_rate"]["default"] == 5.50


class TestCoerceNumber:
    """Tests for coerce_number."""

    @pytest.mark.parametrize("value,expected", [
        (20, 20.0),
        (109.99, 109.99),
        ("109.99", 109.99),
        ("109,99", 109.99),
        (" 5.5 ", 5.5),
        ("-3", -3.0),
    ])
    def test_numeric_values(self, value, expected):
        assert coerce_number(value) == pytest.approx(expected)

    @pytest.mark.parametrize("value", [
        None, "", "abc", True,
        float("nan"), float("inf"), "nan", "inf", "-Infinity", "1e400", 10 ** 400,
    ])
    def test_garbage_becomes_default(self, value):
        assert coerce_number(value) == 0.0
        assert coerce_number(value, default=7.0) == 7.0


class TestFormatting:
    """Tests for format helpers."""

    def test_format_brl(self):
        assert format_currency(1234.5) == "R$ 1.234,50"
        assert format_currency(-26.3992) == "-R$ 26,40"

    def test_format_usd(self):
        assert format_currency(1234.5, "USD") == "US$ 1,234.50"

    def test_format_other(self):
        assert format_currency(10, "EUR") == "10.00 EUR"

    def test_format_percentage(self):
        assert format_percentage(0.3333) == "33.3%"
        assert format_percentage(1.0, decimals=2) == "100.00%"


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_handlers_not_stacked(self, tmp_path):
        log_file = tmp_path / "app.log"
        setup_logging("DEBUG", log_file=str(log_file))
        logger = setup_logging("INFO")

        assert logger.name == "cost_allocator"
        assert logger.level == logging.INFO
        assert len(logger.handlers) == 1
