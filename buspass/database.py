import logging
from enum import Enum
from typing import Generator, Optional

from fastapi import Depends, Request
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from buspass.exceptions import StoreUnavailableError

logger = logging.getLogger(__name__)

Base = declarative_base()


class StoreState(str, Enum):
    """Readiness of the record store connection"""
    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    READY = "ready"


class RecordStore:
    """Process-wide handle on the database with an explicit readiness lifecycle.

    Requests are only handed a session once ``connect()`` has completed; until
    then ``session()`` raises ``StoreUnavailableError``.
    """

    def __init__(self, database_url: str, connect_timeout: int = 10):
        self.database_url = database_url
        self.connect_timeout = connect_timeout
        self.state = StoreState.DISCONNECTED
        self._engine: Optional[Engine] = None
        self._session_factory: Optional[sessionmaker] = None

    @property
    def is_ready(self) -> bool:
        return self.state == StoreState.READY

    def _connect_args(self) -> dict:
        if self.database_url.startswith("sqlite"):
            return {"check_same_thread": False, "timeout": self.connect_timeout}
        return {"connect_timeout": self.connect_timeout}

    def connect(self) -> None:
        """Open the engine, probe it and create missing tables"""
        # Register the mapped tables on Base.metadata
        from buspass import models  # noqa: F401

        self.state = StoreState.CONNECTING
        try:
            engine = create_engine(
                self.database_url,
                connect_args=self._connect_args(),
                pool_pre_ping=True,
            )
            with engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            Base.metadata.create_all(bind=engine)
        except Exception:
            self.state = StoreState.DISCONNECTED
            logger.exception("Failed to connect to record store")
            raise

        self._engine = engine
        self._session_factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
        self.state = StoreState.READY
        logger.info("Connected to record store (%s)", engine.url.render_as_string(hide_password=True))

    def dispose(self) -> None:
        if self._engine is not None:
            self._engine.dispose()
        self._engine = None
        self._session_factory = None
        self.state = StoreState.DISCONNECTED

    def session(self) -> Session:
        if not self.is_ready or self._session_factory is None:
            raise StoreUnavailableError("DB not connected")
        return self._session_factory()


def get_store(request: Request) -> RecordStore:
    return request.app.state.store


def get_db(store: RecordStore = Depends(get_store)) -> Generator[Session, None, None]:
    """Yield a request-scoped session; rejects the request while the store is not ready"""
    db = store.session()
    try:
        yield db
    finally:
        db.close()
