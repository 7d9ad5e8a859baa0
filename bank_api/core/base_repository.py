from contextlib import contextmanager
from typing import Generic, Iterator, TypeVar

from sqlalchemy.orm import Session

TModel = TypeVar("TModel")


class BaseRepository(Generic[TModel]):
    def __init__(self, session: Session) -> None:
        self._session = session

    @contextmanager
    def _savepoint(self) -> Iterator[Session]:
        """
        Flushes pending changes inside a SAVEPOINT.

        A constraint violation rolls back only the savepoint, the request
        transaction stays usable so the caller can retry.
        """
        with self._session.begin_nested():
            yield self._session
            self._session.flush()
