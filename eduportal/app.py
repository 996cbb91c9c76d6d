"""Main FastAPI application with modularized routes."""
from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
from sqlalchemy.orm import Session as DBSession

from eduportal.config import LOG_LEVEL
from eduportal.database import get_db, init_db
from eduportal.logging_setup import setup_console_logging
from eduportal.routes import lesson_tests, navigation

setup_console_logging(LOG_LEVEL)

app = FastAPI(title="Learning Portal Test API")

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


# Startup events
@app.on_event("startup")
def startup_events() -> None:
    """Initialize database on startup."""
    init_db()


@app.get("/api/health")
def health(db: DBSession = Depends(get_db)) -> dict[str, str]:
    """Health check; also checks the database connection."""
    db.execute(text("SELECT 1"))
    return {"status": "ok"}


# Include routers
app.include_router(lesson_tests.router)
app.include_router(navigation.router)
