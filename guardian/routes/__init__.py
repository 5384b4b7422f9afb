from fastapi import APIRouter
from . import auth, obligations, cron, prometheus, internals

router = APIRouter()

router.include_router(auth.router, prefix="/auth", tags=["Authentication"])
router.include_router(obligations.router, prefix="/obligations", tags=["Obligations"])
router.include_router(cron.router, prefix="/api/cron", tags=["Cron"])
router.include_router(prometheus.router, prefix="/metrics", tags=["Metrics"])
router.include_router(internals.router, prefix="/internals", tags=["Internals"])
