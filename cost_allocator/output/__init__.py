"""Output generation modules."""

from .excel_generator import ExcelGenerator
from .report_data import CostReport, ReportDataBuilder

__all__ = ["CostReport", "ExcelGenerator", "ReportDataBuilder"]
