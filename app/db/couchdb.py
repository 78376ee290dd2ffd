import logging
from typing import Optional

import pycouchdb

from app.settings import Settings, settings

logger = logging.getLogger(__name__)


class CouchConnection:
    """
    Holds the CouchDB server handle and the posts/users databases.
    Opened once at application start and closed at shutdown.
    """

    def __init__(self, current_settings: Settings = settings):
        self.settings = current_settings
        self.server: Optional[pycouchdb.Server] = None
        self.posts_db = None
        self.users_db = None

    def open(self) -> "CouchConnection":
        self.server = pycouchdb.Server(self.settings.couchdb_url)
        self.posts_db = self._ensure_database(self.settings.COUCHDB_POSTS_DATABASE)
        self.users_db = self._ensure_database(self.settings.COUCHDB_USERS_DATABASE)
        logger.info(
            f"Connected to CouchDB at {self.settings.COUCHDB_HOST}:{self.settings.COUCHDB_PORT}"
        )
        return self

    def close(self) -> None:
        self.posts_db = None
        self.users_db = None
        self.server = None

    @property
    def is_open(self) -> bool:
        return self.server is not None

    def _ensure_database(self, name: str):
        try:
            return self.server.database(name)
        except pycouchdb.exceptions.NotFound:
            logger.info(f"Creating missing CouchDB database {name}")
            return self.server.create(name)


couch = CouchConnection()


def open_couch() -> CouchConnection:
    return couch.open()


def close_couch() -> None:
    couch.close()


def get_couch() -> CouchConnection:
    """Shared connection for request handlers; fails loudly before startup."""
    if not couch.is_open:
        raise RuntimeError("CouchDB connection is not open")
    return couch
