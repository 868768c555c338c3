import importlib

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from storefront.config import settings
from storefront.utils.log import get_logger

log = get_logger("db")

DATABASE_URL = settings.DATABASE_URL
# sync handlers run on a thread pool, so sqlite connections must be shareable
connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}
engine = create_engine(DATABASE_URL, future=True, echo=False, connect_args=connect_args)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()

# imported before create_all so Base.metadata knows every table
MODEL_MODULES = [
    "storefront.models.product",
    "storefront.models.internal_asset",
    "storefront.models.transaction",
    "storefront.models.brand_settings",
    "storefront.models.product_attribute",
]


def init_db(reset: bool = False):
    """
    Initialize DB schema.

    With reset=True all tables are dropped and recreated (tests, RESET_DB=1).
    Otherwise existing tables are left in place and missing ones created.
    """
    for mod in MODEL_MODULES:
        importlib.import_module(mod)

    if reset:
        log.info("Resetting database...")
        Base.metadata.drop_all(bind=engine)

    Base.metadata.create_all(bind=engine)
    log.info("Database initialized.")


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
