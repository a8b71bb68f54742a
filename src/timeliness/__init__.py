"""
Timeliness - date/time parsing and restriction validation.

Parses loosely formatted date, time and datetime strings against an ordered
set of regex formats, builds calendar-checked values and validates them
against before/after style restrictions.
"""

__version__ = "0.1.0"
