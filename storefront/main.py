# storefront/main.py
import uvicorn

from storefront.api import create_app
from storefront.utils.settings import STORE_BACKEND, SEED_DEMO_DATA
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def init_local_database():
    """Create tables (and demo products) when running against the local SQL store."""
    from storefront.data.database import Base, engine
    from storefront.data import models  # noqa: F401  registers every model
    from storefront.data.seed import seed

    logger.info(f"Models registered in Base.metadata: {list(Base.metadata.tables.keys())}")
    try:
        Base.metadata.create_all(bind=engine)
    except Exception as e:
        logger.error(f"Failed to create tables: {e}")
        raise
    logger.info("Database tables created")

    if SEED_DEMO_DATA:
        logger.info(f"Seeded {seed()} demo products")


if STORE_BACKEND == "sql":
    init_local_database()

app = create_app()

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
