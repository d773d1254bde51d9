DAY_LABELS = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]
MONTH_LABELS = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]
MONTH_NAMES = [
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
]

MONTH_DAYS = [31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31]
YEAR_GRID_ROWS = 31
# Year windows count 365 days for unrecorded totals, leap years included.
YEAR_WINDOW_DAYS = 365

LOGS_TABLE = "daily_logs"

MOOD_LABELS = {
    1: "Awful",
    2: "Bad",
    3: "Okay",
    4: "Good",
    5: "Great",
}

EMPTY_COLOR = "#E4E4E7"
MOOD_COLORS = {
    0: EMPTY_COLOR,
    1: "#DC2626",
    2: "#F97316",
    3: "#EAB308",
    4: "#22C55E",
    5: "#16A34A",
}
WORKOUT_COLORS = {
    0: EMPTY_COLOR,
    1: "#4F46E5",
}
ALCOHOL_COLORS = {
    0: EMPTY_COLOR,
    1: "#FDE68A",
    2: "#FCD34D",
    3: "#FBBF24",
    4: "#F59E0B",
    5: "#D97706",
}
MAX_DRINK_BUCKET = 5

METRICS = ["mood", "workout", "alcohol"]
METRIC_PALETTES = {
    "mood": MOOD_COLORS,
    "workout": WORKOUT_COLORS,
    "alcohol": ALCOHOL_COLORS,
}

VIEW_KINDS = ["week", "month", "year", "custom"]

DEFAULT_NOTES_KEY = "default-secret-key-change-me"
