# customer_api/repositories/base.py

import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import Table, select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from customer_api.domain.exceptions import PersistenceError

logger = logging.getLogger(__name__)


@contextmanager
def translate_errors(operation: str) -> Iterator[None]:
    """Re-raise SQLAlchemy failures as PersistenceError."""
    try:
        yield
    except IntegrityError as exc:
        logger.warning("Store rejected %s: %s", operation, exc.orig)
        raise PersistenceError(operation, str(exc.orig), constraint_violation=True) from exc
    except SQLAlchemyError as exc:
        logger.error("Store failure during %s: %s", operation, exc)
        raise PersistenceError(operation, str(exc)) from exc


class BaseRepository:
    """Operations shared by every repository: existence checks and delete by id."""

    table: Table
    entity_name: str

    def __init__(self, engine: Engine):
        self.engine = engine

    def exists(self, entity_id: int) -> bool:
        stmt = select(self.table.c.id).where(self.table.c.id == entity_id).limit(1)
        with translate_errors(f"select {self.entity_name}"):
            with self.engine.connect() as conn:
                return conn.execute(stmt).first() is not None

    def delete(self, entity_id: int) -> bool:
        with translate_errors(f"delete {self.entity_name}"):
            with self.engine.begin() as conn:
                result = conn.execute(self.table.delete().where(self.table.c.id == entity_id))
                deleted = result.rowcount > 0
        return deleted
