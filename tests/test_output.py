"""Tests for report data and Excel generation."""

from datetime import datetime

import pytest
from openpyxl import load_workbook

from cost_allocator.cost.allocation import AllocationEngine
from cost_allocator.cost.models import AllocationMode, ByPercentage, ByUserCount, CostEntry, Currency
from cost_allocator.output.excel_generator import ExcelGenerator
from cost_allocator.output.report_data import CostReport, ReportDataBuilder


@pytest.fixture
def entries():
    return [
        CostEntry(id="1", name="Railway Subscription", amount=20.0, currency=Currency.USD),
        CostEntry(id="2", name="Apple Developer Fees", amount=20.0, currency=Currency.USD),
        CostEntry(id="3", name="Hostinger Temporary VPS", amount=109.99, currency=Currency.BRL),
    ]


def build_report(entries, config):
    result = AllocationEngine().calculate(entries, 5.50, config)
    return ReportDataBuilder().build(result, generated_at=datetime(2026, 3, 1, 12, 0))


def find_value(ws, label):
    """Return the value next to ``label`` in column A."""
    for row in ws.iter_rows(min_col=1, max_col=2):
        if row[0].value == label:
            return row[1]
    raise AssertionError(f"Label not found: {label}")


class TestReportDataBuilder:
    """Tests for ReportDataBuilder."""

    def test_build_percentage(self, entries):
        report = build_report(entries, ByPercentage(8))

        assert isinstance(report, CostReport)
        assert report.total == pytest.approx(329.99)
        assert report.per_user_cost == pytest.approx(26.3992)
        assert report.mode is AllocationMode.PERCENTAGE
        assert report.target_percentage == 8
        assert report.target_users is None
        assert report.mode_label == "By Percentage of Cost"

    def test_build_users(self, entries):
        report = build_report(entries, ByUserCount(50))

        assert report.target_users == 50
        assert report.target_percentage is None
        assert report.summary()["target_users"] == 50
        assert "target_percentage" not in report.summary()

    def test_rows_follow_entry_order(self, entries):
        report = build_report(entries, ByPercentage(8))

        assert [row.name for row in report.rows] == [e.name for e in entries]
        assert report.rows[0].original_amount == 20.0
        assert report.rows[0].converted_amount == pytest.approx(110.0)

    def test_summary_date(self, entries):
        report = build_report(entries, ByPercentage(8))
        assert report.summary()["generated_at"] == "01/03/2026"

    def test_to_dataframe(self, entries):
        df = build_report(entries, ByPercentage(8)).to_dataframe()

        assert list(df.columns) == ["name", "currency", "original_amount", "converted_amount", "share"]
        assert len(df) == 3
        assert df["share"].sum() == pytest.approx(1.0)

    def test_to_dataframe_empty(self):
        df = build_report([], ByPercentage(8)).to_dataframe()

        assert df.empty
        assert "converted_amount" in df.columns


class TestExcelGenerator:
    """Tests for ExcelGenerator."""

    def test_generate_percentage(self, entries, tmp_path):
        """Workbook holds raw numbers with currency/percent formats."""
        output = tmp_path / "report.xlsx"
        path = ExcelGenerator(output).generate(build_report(entries, ByPercentage(8)))

        assert path == output
        assert output.exists()

        wb = load_workbook(output)
        assert wb.sheetnames == ["Cost Report", "Breakdown"]
        ws = wb["Cost Report"]

        assert ws["A1"].value == "DETAILED COST REPORT"
        assert find_value(ws, "Analysis Date").value == "01/03/2026"

        rate = find_value(ws, "USD/BRL Rate")
        assert rate.value == 5.50
        assert rate.number_format == ExcelGenerator.BRL_FORMAT

        assert find_value(ws, "Allocation Mode").value == "By Percentage of Cost"
        percentage = find_value(ws, "Percentage per User")
        assert percentage.value == pytest.approx(0.08)
        assert percentage.number_format == ExcelGenerator.PERCENT_FORMAT

        per_user = find_value(ws, "Cost per User (BRL)")
        assert per_user.value == pytest.approx(26.3992)

    def test_generate_users(self, entries, tmp_path):
        output = tmp_path / "report.xlsx"
        ExcelGenerator(output).generate(build_report(entries, ByUserCount(50)))

        ws = load_workbook(output)["Cost Report"]
        assert find_value(ws, "Target Users").value == 50
        assert find_value(ws, "Cost per User (BRL)").value == pytest.approx(6.5998)

    def test_breakdown_rows_and_total(self, entries, tmp_path):
        """Entry rows use their own currency format; total row sums to 100%."""
        output = tmp_path / "report.xlsx"
        ExcelGenerator(output).generate(build_report(entries, ByPercentage(8)))
        ws = load_workbook(output)["Cost Report"]

        rows = {row[0].value: row for row in ws.iter_rows(min_col=1, max_col=5)}

        railway = rows["Railway Subscription"]
        assert railway[1].value == "USD"
        assert railway[2].number_format == ExcelGenerator.USD_FORMAT
        assert railway[3].value == pytest.approx(110.0)
        assert railway[4].value == pytest.approx(110.0 / 329.99)

        vps = rows["Hostinger Temporary VPS"]
        assert vps[2].number_format == ExcelGenerator.BRL_FORMAT

        total = rows["MONTHLY TOTAL:"]
        assert total[3].value == pytest.approx(329.99)
        assert total[4].value == 1

    def test_breakdown_sheet(self, entries, tmp_path):
        output = tmp_path / "report.xlsx"
        ExcelGenerator(output).generate(build_report(entries, ByPercentage(8)))
        ws = load_workbook(output)["Breakdown"]

        header = [cell.value for cell in ws[1]]
        assert header == ["name", "currency", "original_amount", "converted_amount", "share"]
        assert ws.max_row == 4
        assert ws["A2"].value == "Railway Subscription"

    def test_empty_report(self, tmp_path):
        """A report with no costs still renders."""
        output = tmp_path / "empty.xlsx"
        ExcelGenerator(output).generate(build_report([], ByUserCount(0)))

        ws = load_workbook(output)["Cost Report"]
        assert find_value(ws, "Cost per User (BRL)").value == 0

    def test_to_bytes(self, entries):
        """In-memory rendering produces a valid xlsx (zip) payload."""
        data = ExcelGenerator().to_bytes(build_report(entries, ByPercentage(8)))

        assert isinstance(data, bytes)
        assert data[:2] == b"PK"
