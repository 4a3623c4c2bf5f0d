"""FastAPI dependency injection."""

import logging
from collections import OrderedDict

from fastapi import Depends, Header

from propcalc.config import settings
from propcalc.data.deal_archive import DealArchive
from propcalc.engine.deal_store import DealStore

logger = logging.getLogger(__name__)


class SessionRegistry:
    """One deal store per client session, least recently used dropped first."""

    def __init__(self, max_sessions: int | None = None):
        self.max_sessions = max_sessions or settings.max_sessions
        self._stores: OrderedDict[str, DealStore] = OrderedDict()

    def __len__(self) -> int:
        return len(self._stores)

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._stores

    def get(self, session_id: str) -> DealStore:
        store = self._stores.get(session_id)
        if store is None:
            store = self._stores[session_id] = DealStore()
            while len(self._stores) > self.max_sessions:
                evicted, _ = self._stores.popitem(last=False)
                logger.info("Dropped idle deal session %s", evicted)
        else:
            self._stores.move_to_end(session_id)
        return store

    def drop(self, session_id: str) -> None:
        self._stores.pop(session_id, None)

    def clear(self) -> None:
        self._stores.clear()


sessions = SessionRegistry()


def get_session_id(
    session_id: str | None = Header(None, alias=settings.session_header),
) -> str:
    return session_id or settings.default_session


def get_deal_store(session_id: str = Depends(get_session_id)) -> DealStore:
    return sessions.get(session_id)


def get_archive() -> DealArchive:
    return DealArchive(settings.deal_db_path)
