# storefront/main.py
from fastapi import FastAPI
import uvicorn

from storefront.api import include_routers
from storefront.data.database import Base, init_db
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

# tabele tworzone przy starcie, modele rejestruje init_db
logger.info("Initializing database...")
try:
    init_db()
    logger.info(f"Database tables ready: {list(Base.metadata.tables.keys())}")
except Exception as e:
    logger.error(f"Failed to create tables: {e}")
    raise


def create_app() -> FastAPI:
    app = FastAPI(
        title="Storefront Service",
        version="1.0.0",
    )

    include_routers(app)

    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
