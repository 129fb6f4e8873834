"""
Health check endpoint.

Used by load balancers, monitoring systems, and humans
to verify the application is running and responsive.
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError

from double_entry_bank.api.dependencies import get_app_settings, get_store
from double_entry_bank.config import Settings
from double_entry_bank.store.unit_of_work import Store

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])


@router.get("/health")
def health_check(
    store: Store = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
):
    """
    Return application health status including database connectivity.

    The database check executes a simple query to verify
    the connection is alive. If it fails, the endpoint
    reports the database as unhealthy, telling the load
    balancer this instance is degraded.
    """
    try:
        store.ping()
        db_status = "healthy"
    except SQLAlchemyError:
        logger.warning("Health check could not reach the database", exc_info=True)
        db_status = "unhealthy"

    return {
        "status": "healthy" if db_status == "healthy" else "degraded",
        "service": "double-entry-bank",
        "version": settings.APP_VERSION,
        "database": db_status,
    }
