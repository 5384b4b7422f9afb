import os
from dotenv import load_dotenv

load_dotenv()

# =========================================================
# APP CONFIG
# =========================================================
class GuardianConfig:
    def __init__(self) -> None:
        self.DATABASE_URL = os.getenv("DATABASE_URL", "postgresql://postgres@localhost:5432/deadline_guardian")
        self.SECRET_KEY = os.getenv("SECRET_KEY")
        self.ALGORITHM = os.getenv("ALGORITHM", "HS256")
        self.ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", str(60 * 24 * 7)))

        # Shared secret for the cron trigger and the worker's internal API calls.
        # When unset both are open, which is only meant for local development.
        self.CRON_SECRET = os.getenv("CRON_SECRET")

        self.FREE_TIER_OBLIGATION_LIMIT = int(os.getenv("FREE_TIER_OBLIGATION_LIMIT", "2"))

        self.CORS_ORIGINS = [
            origin.strip()
            for origin in os.getenv("CORS_ORIGINS", "http://localhost:3000,http://localhost").split(",")
            if origin.strip()
        ]

config = GuardianConfig()
