"""Unit of Work pattern implementation."""

from __future__ import annotations

import abc
from typing import Optional

from fastapi import Depends
from sqlalchemy.orm import Session, sessionmaker

from cinema.db.session import get_session_factory


class AbstractUnitOfWork(abc.ABC):
    session: Optional[Session]

    def __enter__(self) -> AbstractUnitOfWork:
        return self

    def __exit__(self, *args):
        # No-op after a successful commit
        self.rollback()

    def commit(self):
        self._commit()

    @abc.abstractmethod
    def _commit(self):
        raise NotImplementedError

    @abc.abstractmethod
    def rollback(self):
        raise NotImplementedError


class SqlAlchemyUnitOfWork(AbstractUnitOfWork):

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory
        self.session = None

    def __enter__(self):
        self.session = self.session_factory()
        return super().__enter__()

    def __exit__(self, *args):
        try:
            super().__exit__(*args)
        finally:
            self.session.close()

    def _commit(self):
        self.session.commit()

    def rollback(self):
        self.session.rollback()


def get_unit_of_work(
    session_factory: sessionmaker = Depends(get_session_factory),
) -> AbstractUnitOfWork:
    return SqlAlchemyUnitOfWork(session_factory)
