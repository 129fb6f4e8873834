"""
Double-Entry Bank Ledger: FastAPI application.

This is the entry point for the application.
All routers are registered here. The database engine and
the store are created in the lifespan handler from explicit
settings, so importing this module opens no connections.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from double_entry_bank.config import Settings, get_settings
from double_entry_bank.logging_config import configure_logging
from double_entry_bank.models.base import create_db_engine, create_session_factory
from double_entry_bank.services.account_service import AccountService
from double_entry_bank.store.unit_of_work import Store
from double_entry_bank.api.health import router as health_router
from double_entry_bank.api.accounts import router as accounts_router
from double_entry_bank.api.transactions import router as transactions_router
from double_entry_bank.api.ledger import router as ledger_router


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        configure_logging(settings)
        engine = create_db_engine(settings)
        app.state.settings = settings
        app.state.store = Store(
            create_session_factory(engine),
            isolation_level=settings.ISOLATION_LEVEL,
        )
        # The schema comes from Alembic; the settlement row is seeded once
        AccountService(app.state.store, settings).ensure_settlement_account()
        yield
        engine.dispose()

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="Double-entry accounting ledger",
        lifespan=lifespan,
    )

    # Register routers
    app.include_router(health_router)
    app.include_router(accounts_router)
    app.include_router(transactions_router)
    app.include_router(ledger_router)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
