"""Constants and defaults.

Note: Keep constants here to avoid magic strings spread across code.
"""

# Only employees whose projected status equals this name may log in.
ACTIVE_STATUS_NAME = "Active"

DEFAULT_HISTORY_LIMIT = 30

DEFAULT_POSITIONS = ("Trimmer", "Field Manager")
DEFAULT_EMPLOYEE_STATUSES = ("Active", "Inactive", "On Leave")
DEFAULT_ATTENDANCE_STATUSES = ("Present", "Absent", "Sick")
