"""Shared constants for the infrastructure layer.

Constants used across the parsing, building and restriction modules.
"""

# Dummy date anchoring time-only values: 2000-01-01
DUMMY_YEAR = 2000
DUMMY_MONTH = 1
DUMMY_DAY = 1

# Calendar constants
MIN_MONTH = 1
MAX_MONTH = 12

# Component array layout: [year, month, day, hour, minute, second]
COMPONENT_SLOTS = 6
DATE_SLOTS = 3
TIME_SLOTS = 3

# Two-digit years strictly below this are placed in the 2000s
DEFAULT_TWO_DIGIT_YEAR_THRESHOLD = 30

# Formats used when rendering comparison values into messages
DATE_DISPLAY_FORMAT = "%Y-%m-%d"
TIME_DISPLAY_FORMAT = "%H:%M:%S"
DATETIME_DISPLAY_FORMAT = "%Y-%m-%d %H:%M:%S"
