# freshmarket/main.py
from fastapi import FastAPI
from freshmarket.api import api_router
from freshmarket.api.errors import register_error_handlers
from freshmarket.api.routers import health
from freshmarket.data.database import Base, init_db
from freshmarket.utils.logging import get_logger
import uvicorn

logger = get_logger(__name__)


def create_app() -> FastAPI:
    try:
        init_db()
        logger.info(f"Database ready, tables: {list(Base.metadata.tables.keys())}")
    except Exception as e:
        logger.error(f"Failed to create tables: {e}")
        raise

    app = FastAPI(
        title="FreshMarket API",
        version="1.0.0",
    )

    register_error_handlers(app)

    # Include routers
    app.include_router(health.router)
    app.include_router(api_router)

    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
