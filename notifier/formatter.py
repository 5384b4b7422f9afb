"""
Email payloads for deadline notifications.

Urgency here is presentation only; it never feeds back into threshold
selection.
"""
from datetime import datetime
from html import escape

from .config import config
from .schemas import EligibleObligation, EmailPayload

URGENCY_COLORS = {
    "CRITICAL": "#DC2626",
    "URGENT": "#F97316",
    "IMPORTANT": "#F59E0B",
}

# (background, text) per obligation severity
SEVERITY_COLORS = {
    "CRITICAL": ("#FEE2E2", "#991B1B"),
    "HIGH": ("#FED7AA", "#9A3412"),
    "MEDIUM": ("#FEF3C7", "#92400E"),
    "LOW": ("#DBEAFE", "#1E3A8A"),
}


def urgency_level(days_until_deadline: int) -> str:
    if days_until_deadline <= 1:
        return "CRITICAL"
    if days_until_deadline <= 7:
        return "URGENT"
    return "IMPORTANT"


def _days_remaining(days: int) -> str:
    return f"{days} day{'' if days == 1 else 's'} remaining"


def _format_deadline_date(deadline_at: datetime) -> str:
    # e.g. "Monday, March 3, 2025"
    return f"{deadline_at:%A, %B} {deadline_at.day}, {deadline_at.year}"


def format_notification_email(obligation: EligibleObligation, app_url: str = None) -> EmailPayload:
    """Build subject, HTML and plain-text bodies for one eligible obligation."""
    app_url = (app_url or config.APP_URL).rstrip("/")
    obligations_url = f"{app_url}/obligations"

    urgency = urgency_level(obligation.days_until_deadline)
    urgency_color = URGENCY_COLORS[urgency]
    remaining = _days_remaining(obligation.days_until_deadline)
    deadline_date = _format_deadline_date(obligation.deadline_at)
    severity_bg, severity_fg = SEVERITY_COLORS.get(obligation.severity, SEVERITY_COLORS["LOW"])

    subject = f"⚠️ {urgency}: {obligation.title} - {remaining}"

    title = escape(obligation.title)
    consequence = escape(obligation.consequence)
    category = escape(obligation.category.lower())
    severity = escape(obligation.severity)

    html = f"""<!DOCTYPE html>
<html>
<head>
  <meta charset="utf-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>{escape(subject)}</title>
</head>
<body style="margin: 0; padding: 0; font-family: -apple-system, 'Segoe UI', Roboto, Arial, sans-serif; background-color: #F3F4F6;">
  <table width="100%" cellpadding="0" cellspacing="0" style="background-color: #F3F4F6; padding: 40px 20px;">
    <tr>
      <td align="center">
        <table width="600" cellpadding="0" cellspacing="0" style="background-color: white; border-radius: 8px; overflow: hidden;">
          <tr>
            <td style="background-color: {urgency_color}; padding: 20px; text-align: center;">
              <h1 style="margin: 0; color: white; font-size: 24px;">{urgency} DEADLINE ALERT</h1>
              <p style="margin: 8px 0 0 0; color: white; font-size: 18px;">{remaining}</p>
            </td>
          </tr>
          <tr>
            <td style="padding: 32px;">
              <h2 style="margin: 0 0 16px 0; color: #111827; font-size: 22px;">{title}</h2>
              <div style="background-color: #FEF3C7; border-left: 4px solid #F59E0B; padding: 16px; margin: 20px 0;">
                <p style="margin: 0 0 8px 0; font-weight: bold; color: #92400E;">⚠️ What happens if you miss this?</p>
                <p style="margin: 0; color: #78350F; line-height: 1.6;">{consequence}</p>
              </div>
              <table width="100%" cellpadding="0" cellspacing="0" style="margin: 24px 0;">
                <tr>
                  <td style="padding: 12px 0; color: #6B7280;">Deadline:</td>
                  <td style="padding: 12px 0; text-align: right;"><strong>{deadline_date}</strong></td>
                </tr>
                <tr>
                  <td style="padding: 12px 0; color: #6B7280;">Category:</td>
                  <td style="padding: 12px 0; text-align: right; text-transform: capitalize;">{category}</td>
                </tr>
                <tr>
                  <td style="padding: 12px 0; color: #6B7280;">Severity:</td>
                  <td style="padding: 12px 0; text-align: right;">
                    <span style="background-color: {severity_bg}; color: {severity_fg}; padding: 4px 12px; border-radius: 12px; font-weight: bold;">{severity}</span>
                  </td>
                </tr>
              </table>
              <div style="text-align: center; margin: 32px 0;">
                <a href="{obligations_url}" style="background-color: #F97316; color: white; text-decoration: none; padding: 14px 32px; border-radius: 6px; font-weight: bold;">View All Obligations</a>
              </div>
            </td>
          </tr>
          <tr>
            <td style="background-color: #F9FAFB; padding: 24px; text-align: center; border-top: 1px solid #E5E7EB;">
              <p style="margin: 0 0 8px 0; color: #6B7280; font-size: 14px;">This is an automated reminder from Deadline Guardian</p>
              <p style="margin: 0; color: #9CA3AF; font-size: 12px;">You're receiving this because you have active critical obligations</p>
            </td>
          </tr>
        </table>
      </td>
    </tr>
  </table>
</body>
</html>
"""

    text = f"{urgency} DEADLINE ALERT\n"
    text += f"{remaining}\n\n"
    text += f"{obligation.title}\n\n"
    text += f"Deadline: {deadline_date}\n"
    text += f"Category: {obligation.category.lower()}\n"
    text += f"Severity: {obligation.severity}\n\n"
    text += f"⚠️ What happens if you miss this?\n"
    text += f"{obligation.consequence}\n\n"
    text += f"View all obligations: {obligations_url}\n\n"
    text += "---\n"
    text += "This is an automated reminder from Deadline Guardian\n"

    return EmailPayload(subject=subject, html=html, text=text)
