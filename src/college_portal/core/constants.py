"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

ATTENDANCE_THRESHOLD = 0.85
DEFAULT_TOTAL_MARKS = 100
OVERALL_KEY = "Overall"
FILTER_ALL = "all"

ATTENDANCE_NATURAL_KEY = ("student_key", "subject", "date")
MARK_NATURAL_KEY = ("student_key", "subject", "exam_type", "semester")

MIN_FEEDBACK_RATING = 1
MAX_FEEDBACK_RATING = 5
MIN_PASSWORD_LENGTH = 6
