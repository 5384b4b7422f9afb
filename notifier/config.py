import os
from pathlib import Path
from dotenv import load_dotenv

current_file_path = Path(__file__).resolve()
root_dir = current_file_path.parent.parent
env_path = root_dir / ".env"

if env_path.exists():
    load_dotenv(dotenv_path=env_path)


class NotifierConfig:
    def __init__(self) -> None:
        self.INTERNAL_API_URL = os.getenv("INTERNAL_API_URL", "http://localhost:8000/internals")
        self.INTERNAL_API_TIMEOUT = float(os.getenv("INTERNAL_API_TIMEOUT", "10"))
        self.CRON_SECRET = os.getenv("CRON_SECRET")
        self.APP_URL = os.getenv("APP_URL", "http://localhost:3000")

        # Email transport: "console" (log only) or "smtp"
        self.EMAIL_TRANSPORT = os.getenv("EMAIL_TRANSPORT", "console").lower()
        self.SMTP_HOST = os.getenv("SMTP_HOST")
        self.SMTP_PORT = int(os.getenv("SMTP_PORT", "587"))
        self.SMTP_USER = os.getenv("SMTP_USER")
        self.SMTP_PASSWORD = os.getenv("SMTP_PASSWORD")
        self.SMTP_FROM = os.getenv("SMTP_FROM") or self.SMTP_USER
        self.SMTP_TIMEOUT = float(os.getenv("SMTP_TIMEOUT", "15"))

config = NotifierConfig()
