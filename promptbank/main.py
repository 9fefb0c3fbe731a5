"""
promptbank service entry point.

Hosts import wizard sessions in memory. The caller supplies categories and
its bank registry when opening a session and persists the compiled result
itself.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from promptbank.config import settings
from promptbank.api.v1.router import api_router
from promptbank.core.session_registry import SessionRegistry
from logging import getLogger, Filter
import logging

logger = getLogger(__name__)
logger.setLevel(logging.INFO)


class HealthCheckFilter(Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        return record.getMessage().find("/health") == -1


logging.getLogger("uvicorn.access").addFilter(HealthCheckFilter())


app = FastAPI(title=settings.app_name, debug=settings.debug, redirect_slashes=False)


@app.on_event("startup")
async def startup_event():
    logger.info("--- Starting promptbank ---")
    app.state.session_registry = SessionRegistry(
        maxsize=settings.max_import_sessions,
        ttl=settings.import_session_ttl_seconds,
    )
    logger.info("--- promptbank startup completed ---")


@app.on_event("shutdown")
async def shutdown_event():
    logger.info("--- Server shutting down! ---")
    if hasattr(app.state, "session_registry"):
        await app.state.session_registry.clear()
        logger.info("--- Open import sessions dropped. ---")


app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router, prefix="/api/v1")


@app.get("/health")
def health_check():
    return {"status": "healthy"}


@app.get("/")
def read_root():
    return {"message": f"Welcome to {settings.app_name}"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
