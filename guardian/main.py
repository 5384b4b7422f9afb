import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from guardian.config import config
from guardian.database import engine, Base
from guardian.routes import router
from guardian.routes.prometheus import metrics_middleware
from sqlalchemy import inspect

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# =========================================================
# FASTAPI APP
# =========================================================

app = FastAPI(title="Deadline Guardian API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register Prometheus middleware
app.middleware("http")(metrics_middleware)

# Include API Router
app.include_router(router)

@app.get("/health")
def health():
    return {"status": "ok"}

# =========================================================
# AUTO-CREATE TABLES ON STARTUP
# =========================================================
@app.on_event("startup")
def init_database():
    inspector = inspect(engine)
    existing_tables = set(inspector.get_table_names())
    missing = [t for t in Base.metadata.sorted_tables if t.name not in existing_tables]
    if missing:
        logger.info(f"🔄 Creating tables: {[t.name for t in missing]}")
        Base.metadata.create_all(bind=engine, tables=missing)
    else:
        logger.info(f"ℹ️ Tables already exist: {sorted(existing_tables)}")
