"""
Consultancy Kernel

Pure domain layer for the consultancy finance dashboard:
- Money and calendar-month value objects with fixed half-up rounding
- Time-ranged configuration series with validated, non-overlapping intervals
- Read-only snapshot records handed over by the record store
- Typed exceptions and structured JSON logging
"""

__version__ = "0.1.0"
