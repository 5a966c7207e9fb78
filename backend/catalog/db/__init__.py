import importlib
import logging
import re
from uuid import uuid4

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from catalog.config import settings

logger = logging.getLogger(__name__)

DATABASE_URL = settings.DATABASE_URL
connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}
engine = create_engine(DATABASE_URL, future=True, echo=False, connect_args=connect_args)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()

ID_PATTERN = re.compile(r"^[0-9a-f]{32}$")


def new_id() -> str:
    return uuid4().hex


def is_valid_id(value) -> bool:
    """Document ids are uuid4 hex strings; anything else is malformed."""
    return isinstance(value, str) and bool(ID_PATTERN.match(value))


# every module that declares tables; imported before create_all
MODEL_MODULES = [
    "catalog.models.category",
    "catalog.models.product",
]


def init_db(reset: bool = False):
    """
    Initialize DB schema.

    With reset=True all tables are dropped and recreated, which is what the
    test suite and RESET_DB=1 rely on. Otherwise existing tables are kept.
    """
    for mod in MODEL_MODULES:
        importlib.import_module(mod)

    if reset:
        logger.info("Resetting database tables")
        Base.metadata.drop_all(bind=engine)

    Base.metadata.create_all(bind=engine)
    logger.info("Database initialized (%s)", engine.url.render_as_string(hide_password=True))


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
