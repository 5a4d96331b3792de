"""
Inquiry Intake — FastAPI Service

Receives client inquiry form submissions, triages them by priority, stores
them and sends confirmation and alert emails.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from intake.db.session import init_db
from intake.logging_config import configure_logging
from intake.routes import health, reports, submissions

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Configure logging and create tables on startup (idempotent)."""
    configure_logging()
    await init_db()
    logger.info("Inquiry intake service started")
    yield


app = FastAPI(
    title="Inquiry Intake API",
    description="Client inquiry intake: field extraction, priority triage, notifications and storage.",
    version="2.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(submissions.router)
app.include_router(reports.router)
app.include_router(health.router)
