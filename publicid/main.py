from publicid.db.Connection import database
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
import signal, sys

from publicid.core.config import settings
from publicid.db.Models import models
from publicid.api import public_ids, admin
from publicid.core.logging_config import configure_logging

logger = configure_logging()
logger.info(f"Application '{settings.PROJECT_NAME}' starting up.")

models.Base.metadata.create_all(bind=database.engine)
logger.info("Database models initialized/checked.")


app = FastAPI(
    title=settings.PROJECT_NAME,
    description="Collision-free, non-sequential public id service"
)

app.include_router(public_ids.router, prefix="")
app.include_router(admin.router)

@app.get("/health", tags=["health"])
def health_check():
    return {"status": "healthy", "service": "public-id-generator"}

@app.get("/ready", tags=["health"])
def readiness():
    details = {"db": database.verify_database_connection()}
    if settings.PUBLIC_ID_BACKEND == "redis":
        details["redis"] = database.verify_redis_connection()
    return {"ready": all(details.values()), "details": details}

@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})

def _shutdown(signum, frame):
    logger.info("Shutting down gracefully...")
    try:
        database.engine.dispose()
    except Exception:
        logger.debug("Error disposing DB engine")
    try:
        database.redis_client.close()
    except Exception:
        logger.debug("Error closing Redis client")
    sys.exit(0)

signal.signal(signal.SIGTERM, _shutdown)
signal.signal(signal.SIGINT, _shutdown)
