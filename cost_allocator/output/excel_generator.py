"""Generate Excel reports from calculated cost data."""

import io
import logging
from pathlib import Path
from typing import Optional, Union

from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils.dataframe import dataframe_to_rows

from ..cost.models import AllocationMode, Currency
from .report_data import CostReport

logger = logging.getLogger(__name__)

DEFAULT_FILENAME = "cost-report.xlsx"


class ExcelGenerator:
    """Generate the cost report workbook."""

    # Style definitions
    TITLE_FILL = PatternFill(start_color="4F46E5", end_color="4F46E5", fill_type="solid")
    TITLE_FONT = Font(color="FFFFFF", bold=True, size=16)
    SECTION_FILL = PatternFill(start_color="F1F5F9", end_color="F1F5F9", fill_type="solid")
    SECTION_FONT = Font(color="334155", bold=True)
    HEADER_FILL = PatternFill(start_color="E2E8F0", end_color="E2E8F0", fill_type="solid")
    HEADER_FONT = Font(color="0F172A", bold=True)
    TOTAL_FILL = PatternFill(start_color="F8FAFC", end_color="F8FAFC", fill_type="solid")
    BRL_FORMAT = '"R$ "#,##0.00'
    USD_FORMAT = '"US$ "#,##0.00'
    PERCENT_FORMAT = "0.00%"
    THIN_BORDER = Border(
        left=Side(style="thin", color="E2E8F0"),
        right=Side(style="thin", color="E2E8F0"),
        top=Side(style="thin", color="E2E8F0"),
        bottom=Side(style="thin", color="E2E8F0")
    )
    COLUMN_WIDTHS = {"A": 36, "B": 14, "C": 20, "D": 24, "E": 22}
    LAST_COLUMN = 5

    def __init__(self, output_path: Optional[Union[str, Path]] = None):
        """Initialize the generator.

        Args:
            output_path: Path for the output Excel file
        """
        self.output_path = Path(output_path or DEFAULT_FILENAME)

    def generate(self, report: CostReport) -> Path:
        """Write the report to ``output_path``.

        Args:
            report: Report data

        Returns:
            Path to generated file
        """
        workbook = self.build_workbook(report)
        workbook.save(self.output_path)
        logger.info(f"Excel report saved to {self.output_path}")
        return self.output_path

    def to_bytes(self, report: CostReport) -> bytes:
        """Render the report workbook in memory (for browser downloads)."""
        buffer = io.BytesIO()
        self.build_workbook(report).save(buffer)
        return buffer.getvalue()

    def build_workbook(self, report: CostReport) -> Workbook:
        """Create the workbook with the report and breakdown sheets."""
        workbook = Workbook()
        # Remove default sheet
        workbook.remove(workbook.active)

        self._create_report_sheet(workbook, report)
        self._create_breakdown_sheet(workbook, report)
        return workbook

    def _section(self, ws, row: int, title: str) -> None:
        ws.merge_cells(start_row=row, start_column=1, end_row=row, end_column=self.LAST_COLUMN)
        cell = ws.cell(row=row, column=1, value=title)
        cell.fill = self.SECTION_FILL
        cell.font = self.SECTION_FONT

    def _label_value(self, ws, row: int, label: str, value, number_format: Optional[str] = None) -> None:
        ws.cell(row=row, column=1, value=label).border = self.THIN_BORDER
        ws.merge_cells(start_row=row, start_column=2, end_row=row, end_column=self.LAST_COLUMN)
        cell = ws.cell(row=row, column=2, value=value)
        cell.border = self.THIN_BORDER
        cell.alignment = Alignment(horizontal="left")
        if number_format:
            cell.number_format = number_format

    def _create_report_sheet(self, workbook: Workbook, report: CostReport) -> None:
        """Create the formatted Cost Report sheet."""
        ws = workbook.create_sheet("Cost Report")

        # Title
        ws.merge_cells(start_row=1, start_column=1, end_row=1, end_column=self.LAST_COLUMN)
        title = ws.cell(row=1, column=1, value="DETAILED COST REPORT")
        title.fill = self.TITLE_FILL
        title.font = self.TITLE_FONT
        title.alignment = Alignment(horizontal="center", vertical="center")

        # General information
        row = 3
        self._section(ws, row, "GENERAL INFORMATION")
        row += 1
        self._label_value(ws, row, "Analysis Date", report.generated_at.strftime("%d/%m/%Y"))
        row += 1
        self._label_value(ws, row, "USD/BRL Rate", report.exchange_rate, self.BRL_FORMAT)
        row += 2

        # Breakdown
        self._section(ws, row, "FIXED COST BREAKDOWN")
        row += 1
        headers = ["Cost Name", "Currency", "Original Amount", "Converted Amount (BRL)", "Share (%)"]
        for col, header in enumerate(headers, 1):
            cell = ws.cell(row=row, column=col, value=header)
            cell.fill = self.HEADER_FILL
            cell.font = self.HEADER_FONT
            cell.border = self.THIN_BORDER
        row += 1

        for cost in report.rows:
            original_format = self.USD_FORMAT if cost.currency == Currency.USD.value else self.BRL_FORMAT
            values = [
                (cost.name, None),
                (cost.currency, None),
                (cost.original_amount, original_format),
                (cost.converted_amount, self.BRL_FORMAT),
                (cost.share, self.PERCENT_FORMAT),
            ]
            for col, (value, fmt) in enumerate(values, 1):
                cell = ws.cell(row=row, column=col, value=value)
                cell.border = self.THIN_BORDER
                if fmt:
                    cell.number_format = fmt
            row += 1

        # Total
        ws.merge_cells(start_row=row, start_column=1, end_row=row, end_column=3)
        label = ws.cell(row=row, column=1, value="MONTHLY TOTAL:")
        label.alignment = Alignment(horizontal="right")
        total = ws.cell(row=row, column=4, value=report.total)
        total.number_format = self.BRL_FORMAT
        share = ws.cell(row=row, column=5, value=1)
        share.number_format = self.PERCENT_FORMAT
        for col in range(1, self.LAST_COLUMN + 1):
            cell = ws.cell(row=row, column=col)
            cell.font = Font(bold=True)
            cell.fill = self.TOTAL_FILL
            cell.border = self.THIN_BORDER
        row += 2

        # Allocation metrics
        self._section(ws, row, "ALLOCATION METRICS")
        row += 1
        self._label_value(ws, row, "Allocation Mode", report.mode_label)
        row += 1
        if report.mode is AllocationMode.USERS:
            self._label_value(ws, row, "Target Users", report.target_users, "0")
        else:
            self._label_value(
                ws, row, "Percentage per User",
                report.target_percentage / 100, self.PERCENT_FORMAT
            )
        row += 1
        self._label_value(ws, row, "Cost per User (BRL)", report.per_user_cost, self.BRL_FORMAT)
        for col in (1, 2):
            ws.cell(row=row, column=col).font = Font(bold=True)
            ws.cell(row=row, column=col).fill = self.TOTAL_FILL

        for column, width in self.COLUMN_WIDTHS.items():
            ws.column_dimensions[column].width = width

    def _create_breakdown_sheet(self, workbook: Workbook, report: CostReport) -> None:
        """Create the Breakdown sheet with the raw per-entry table."""
        ws = workbook.create_sheet("Breakdown")
        df = report.to_dataframe()

        for row in dataframe_to_rows(df, index=False, header=True):
            ws.append(row)

        for cell in ws[1]:
            cell.fill = self.HEADER_FILL
            cell.font = self.HEADER_FONT

        for row in ws.iter_rows(min_row=2):
            row[2].number_format = "#,##0.00"
            row[3].number_format = self.BRL_FORMAT
            row[4].number_format = self.PERCENT_FORMAT

        # Freeze header row
        ws.freeze_panes = "A2"
        for column, width in self.COLUMN_WIDTHS.items():
            ws.column_dimensions[column].width = width
