# storefront/data/store.py
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from storefront.data.models import COLLECTIONS
from storefront.domain.errors import DataUnavailable, WriteError
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

Row = Dict[str, Any]
Filters = Dict[str, Any]


class Store(ABC):
    """
    Row store over named collections (products, cart_items, orders,
    order_items, profiles, reviews, wishlist_items).

    Filters are equality matches; a list, tuple or set value means
    "field is one of". order_by takes a column name, "-" prefix for descending.
    """

    @abstractmethod
    def query(self, collection: str, filters: Filters | None = None, order_by: str | None = None) -> List[Row]:
        """Raises DataUnavailable."""

    @abstractmethod
    def insert(self, collection: str, rows: Row | Iterable[Row]) -> List[Row]:
        """Writes all rows in one request. Raises WriteError."""

    @abstractmethod
    def update(self, collection: str, filters: Filters, patch: Row) -> List[Row]:
        """Returns updated rows, empty when nothing matched. Raises WriteError."""

    @abstractmethod
    def delete(self, collection: str, filters: Filters) -> int:
        """Returns number of deleted rows. Raises WriteError."""


def as_rows(rows: Row | Iterable[Row]) -> List[Row]:
    if isinstance(rows, dict):
        return [rows]
    return list(rows)


class SqlStore(Store):
    """Store backed by a SQLAlchemy database, for local runs and tests."""

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    def _model(self, collection: str):
        try:
            return COLLECTIONS[collection]
        except KeyError:
            raise ValueError(f"Unknown collection {collection}")

    @staticmethod
    def _where(stmt, model, filters: Filters | None):
        for field, value in (filters or {}).items():
            column = getattr(model, field)
            if isinstance(value, (list, tuple, set)):
                stmt = stmt.where(column.in_(list(value)))
            else:
                stmt = stmt.where(column == value)
        return stmt

    def query(self, collection, filters=None, order_by=None):
        model = self._model(collection)
        stmt = self._where(select(model), model, filters)

        if order_by:
            column = getattr(model, order_by.lstrip("-"))
            stmt = stmt.order_by(column.desc() if order_by.startswith("-") else column.asc())

        try:
            with self.session_factory() as db:
                return [row.to_dict() for row in db.execute(stmt).scalars().all()]
        except SQLAlchemyError as e:
            logger.error(f"Query on {collection} failed: {e}")
            raise DataUnavailable(collection, str(e)) from e

    def insert(self, collection, rows):
        model = self._model(collection)
        objects = [model(**row) for row in as_rows(rows)]

        try:
            with self.session_factory() as db:
                db.add_all(objects)
                db.flush()
                created = [obj.to_dict() for obj in objects]
                db.commit()
                return created
        except SQLAlchemyError as e:
            logger.error(f"Insert into {collection} failed: {e}")
            raise WriteError(collection, "insert", str(e)) from e

    def update(self, collection, filters, patch):
        model = self._model(collection)
        stmt = self._where(select(model), model, filters)

        try:
            with self.session_factory() as db:
                objects = db.execute(stmt).scalars().all()
                for obj in objects:
                    for field, value in patch.items():
                        setattr(obj, field, value)
                db.flush()
                updated = [obj.to_dict() for obj in objects]
                db.commit()
                return updated
        except SQLAlchemyError as e:
            logger.error(f"Update of {collection} failed: {e}")
            raise WriteError(collection, "update", str(e)) from e

    def delete(self, collection, filters):
        model = self._model(collection)
        stmt = self._where(delete(model), model, filters).execution_options(synchronize_session=False)

        try:
            with self.session_factory() as db:
                result = db.execute(stmt)
                db.commit()
                return result.rowcount
        except SQLAlchemyError as e:
            logger.error(f"Delete from {collection} failed: {e}")
            raise WriteError(collection, "delete", str(e)) from e
