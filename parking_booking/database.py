import logging
from contextlib import contextmanager
from fastapi import Request
from sqlmodel import create_engine, SQLModel, Session
from sqlalchemy import inspect
from sqlalchemy.exc import OperationalError, SQLAlchemyError
from sqlalchemy.pool import StaticPool
from parking_booking.config import Config
from parking_booking.errors import StoreFailureError

# REGISTERS THE TABLES ON SQLModel.metadata
from parking_booking.models import parking_models  # noqa: F401

logger = logging.getLogger(__name__)


class Store:
    # OPENED BY THE APP LIFESPAN, CLOSED AT SHUTDOWN. ONLY fetch_all/fetch_one RETRY

    def __init__(self, database_url: str, echo: bool = False, read_retries: int = Config.READ_RETRIES):
        engine_kwargs = {"echo": echo}
        if database_url.startswith("sqlite"):
            engine_kwargs["connect_args"] = {"check_same_thread": False}
            if ":memory:" in database_url or database_url == "sqlite://":
                # ONE SHARED CONNECTION, OTHERWISE EVERY SESSION SEES AN EMPTY DATABASE
                engine_kwargs["poolclass"] = StaticPool
        self.engine = create_engine(database_url, **engine_kwargs)
        self.read_retries = read_retries

    @classmethod
    def from_config(cls):
        return cls(Config.DATABASE_URL, echo=Config.SQL_ECHO)

    def init_db(self):
        try:
            inspector = inspect(self.engine)
            # LIST OF ALL TABLES
            existing_tables = inspector.get_table_names()

            # NO NEED TO CREATE IF IT IS ALREADY EXIST
            if not existing_tables:
                SQLModel.metadata.create_all(self.engine)
                logger.info("Tables created successfully")
            else:
                logger.info("Tables already exist, skipping creation")
        except Exception as e:
            logger.error(f"Error in initializing the database: {e}")
            raise

    def close(self):
        self.engine.dispose()
        logger.info("Database engine disposed")

    def session(self) -> Session:
        return Session(self.engine, expire_on_commit=False)

    def fetch_all(self, query, params=None):
        attempts = self.read_retries + 1
        for attempt in range(1, attempts + 1):
            try:
                with self.session() as session:
                    return session.execute(query, params or {}).fetchall()
            except OperationalError as e:
                if attempt == attempts:
                    logger.error(f"Read query failed after {attempts} attempts: {e}")
                    raise StoreFailureError(f"Database read failed: {e}") from e
                logger.warning(f"Read query failed (attempt {attempt}/{attempts}), retrying: {e}")
            except SQLAlchemyError as e:
                logger.error(f"Read query failed: {e}")
                raise StoreFailureError(f"Database read failed: {e}") from e

    def fetch_one(self, query, params=None):
        rows = self.fetch_all(query, params)
        return rows[0] if rows else None

    @contextmanager
    def transaction(self):
        with self.session() as session:
            with session.begin():
                yield session


def get_store(request: Request) -> Store:
    return request.app.state.store
