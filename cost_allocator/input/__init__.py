"""Input handling modules."""

from .cost_parser import CostFileParser, parse_cost_file

__all__ = ["CostFileParser", "parse_cost_file"]
