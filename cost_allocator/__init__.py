"""Infrastructure cost allocator: totals and per-user cost for recurring costs."""

__version__ = "1.0.0"
