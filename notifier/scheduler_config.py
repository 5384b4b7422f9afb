"""
Scheduler Configuration for Obligation Notifications

Defines notification thresholds, their tolerance bands and scheduler settings.
"""

# Notification thresholds in days before deadline
THRESHOLD_30_DAYS = 30   # Early heads-up
THRESHOLD_7_DAYS = 7     # One week left
THRESHOLD_1_DAY = 1      # Last call

# Inclusive (min, max) days-until-deadline band for each threshold.
# +/- 1 day absorbs irregular cron intervals; bands never overlap each other.
THRESHOLD_BANDS = {
    THRESHOLD_30_DAYS: (29, 31),
    THRESHOLD_7_DAYS: (6, 8),
    THRESHOLD_1_DAY: (0, 2),
}

# Coarse pre-filter: only obligations due within this many days are fetched
MAX_HORIZON_DAYS = 31

MILLISECONDS_PER_DAY = 1000 * 60 * 60 * 24

# How often the worker runs the notification check (in hours)
NOTIFICATION_CHECK_INTERVAL_HOURS = 6

SCHEDULER_TIMEZONE = "UTC"
