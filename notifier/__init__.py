from .thresholds import days_until, classify_threshold
from .eligibility import find_obligations_needing_notification
from .formatter import format_notification_email
from .dispatcher import process_notifications
