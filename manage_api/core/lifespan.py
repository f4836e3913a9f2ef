"""
Application startup and shutdown.

The account routes get their database sessions from ``app.state.sessionmaker``
(see ``core.database.get_db``); this module owns its creation and disposal.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from manage_api.core.config import settings
from manage_api.core.database import close_database_connection, create_database_engine

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Open the database engine for the account service and dispose it on exit."""
    logger.info(
        f"Starting {settings.app_name} v{settings.version} "
        f"({settings.environment}, reset mail "
        f"{'enabled' if settings.password_reset_mail_enabled else 'disabled'}, "
        f"smtp {'configured' if settings.smtp_configured else 'not configured'})"
    )

    engine = create_database_engine()
    app.state.sessionmaker = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )

    try:
        yield
    finally:
        logger.info(f"Stopping {settings.app_name}: disposing account database engine")
        await close_database_connection(engine)
        app.state.sessionmaker = None
