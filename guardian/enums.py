import enum
# =========================================================
# ENUMS
# =========================================================
class ObligationStatus(str, enum.Enum):
    active = "ACTIVE"
    handled = "HANDLED"

class ObligationSeverity(str, enum.Enum):
    low = "LOW"
    medium = "MEDIUM"
    high = "HIGH"
    critical = "CRITICAL"

class ObligationCategory(str, enum.Enum):
    tax = "TAX"
    subscription = "SUBSCRIPTION"
    legal = "LEGAL"
    business = "BUSINESS"
    personal = "PERSONAL"
    other = "OTHER"

class NotificationType(str, enum.Enum):
    email = "EMAIL"

class UrgencyLevel(str, enum.Enum):
    safe = "safe"
    warning = "warning"
    danger = "danger"
    critical = "critical"
