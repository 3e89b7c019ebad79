"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_SESSION_DAYS = 7
DEFAULT_REPORT_MONTHS = 6
ALLOWED_REPORT_MONTHS = (3, 6, 12)
CATEGORY_PREFIX_LENGTH = 4
CATEGORY_TOP_N = 5
CATEGORY_FALLBACK = "其他"
DASHBOARD_RECENT_LIMIT = 5
MONEY_MAX_DIGITS = 12
