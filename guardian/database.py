from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool
from guardian.config import config

# =========================================================
# DATABASE SETUP
# =========================================================
def build_engine(database_url: str):
    if database_url.startswith("sqlite"):
        # In-memory SQLite must share one connection across threads
        return create_engine(
            database_url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_engine(database_url, pool_pre_ping=True)

engine = build_engine(config.DATABASE_URL)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()
