"""Constants and defaults.

Note: Keep business constants here to avoid magic numbers spread across code.
Settings modules in ``config`` may override the threshold/payroll values.
"""

from decimal import Decimal

DEFAULT_SESSION_DAYS = 7
DEFAULT_HISTORY_LIMIT = 30

# Attendance classification (hours worked in a day)
PRESENT_HOURS_THRESHOLD = 7
HALF_DAY_HOURS_THRESHOLD = 4

# Payroll
DEFAULT_PF_PERCENTAGE = Decimal("12.00")
DEFAULT_TOTAL_WORKING_DAYS = 26
MIN_WORKING_DAYS = 1
MAX_WORKING_DAYS = 31
HALF_DAY_FACTOR = Decimal("0.5")

# Salary slip
CURRENCY_SYMBOL = "₹"
HR_CONTACT_EMAIL = "hr@example.com"
NOT_AVAILABLE = "N/A"
