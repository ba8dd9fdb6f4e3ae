"""
Store Gateway - the only path from the services to the relational store.

The gateway speaks in table names and plain dictionaries:
- insert / select_by_id / select_all / update / delete / count
- an optional single-hop JoinSpec that outer-joins a foreign table through a
  foreign key and nests the partner row under the foreign table's name

Each call runs in its own session_scope(), so every call is one atomic round
trip. Failures surface as StoreError (never retried here) and missing rows as
NotFoundError.

Usage:
    from src.services.store_gateway import get_gateway, JoinSpec

    gateway = get_gateway()
    row = gateway.select_by_id(
        "packages", 7, join=JoinSpec(table="persons", foreign_key="delivery_person_id")
    )
    row["persons"]  # joined person dict, or None
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Type

from sqlalchemy.exc import SQLAlchemyError

from src.models import Package, Person
from src.models.base import BaseModel
from src.services.database import session_scope
from src.services.exceptions import NotFoundError, StoreError
from src.services.logging_utils import get_service_logger, log_operation

logger = get_service_logger(__name__)

Row = Dict[str, Any]

# Signed 64-bit INTEGER range of the primary keys
MIN_ROW_ID = -(2**63)
MAX_ROW_ID = 2**63 - 1

# Registered tables, keyed by table name
TABLES: Dict[str, Type[BaseModel]] = {
    Package.__tablename__: Package,
    Person.__tablename__: Person,
}


@dataclass(frozen=True)
class JoinSpec:
    """Single-hop relation: <table>.id = <base table>.<foreign_key>."""

    table: str
    foreign_key: str


class StoreGateway:
    """
    Table-oriented CRUD and join access over the SQLAlchemy session layer.

    Args:
        tables: Table name -> model mapping (defaults to TABLES)
    """

    def __init__(self, tables: Optional[Dict[str, Type[BaseModel]]] = None):
        self._tables = dict(tables or TABLES)

    def _model(self, table: str) -> Type[BaseModel]:
        try:
            return self._tables[table]
        except KeyError:
            raise ValueError(f"Unknown table: {table}") from None

    def _column(self, model: Type[BaseModel], name: str):
        if name not in model.column_names():
            raise ValueError(f"Unknown column {model.__tablename__}.{name}")
        return getattr(model, name)

    def _require_row_id(self, model: Type[BaseModel], row_id: int) -> None:
        # An id the store cannot even represent names no row
        if isinstance(row_id, int) and not MIN_ROW_ID <= row_id <= MAX_ROW_ID:
            raise NotFoundError(model.__name__, row_id)

    def _store_error(self, action: str, table: str, error: SQLAlchemyError) -> StoreError:
        log_operation(
            logger,
            operation=f"store_{action}",
            outcome="error",
            level=logging.ERROR,
            table=table,
            error=str(error),
        )
        return StoreError(f"Failed to {action} {table}: {error}", original_error=error)

    def _joined_query(self, session, model, join: JoinSpec):
        partner = self._model(join.table)
        foreign_key = self._column(model, join.foreign_key)
        return session.query(model, partner).outerjoin(partner, foreign_key == partner.id)

    @staticmethod
    def _merge(base, partner, join: JoinSpec) -> Row:
        row = base.to_dict()
        row[join.table] = partner.to_dict() if partner is not None else None
        return row

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def insert(self, table: str, record: Row) -> Row:
        """
        Insert one row.

        Args:
            table: Table name
            record: Column values (id and created_at are store-assigned)

        Returns:
            The stored row, including id and created_at

        Raises:
            StoreError: If the insert fails (constraint violation, connection, ...)
        """
        model = self._model(table)
        try:
            with session_scope() as session:
                instance = model()
                instance.update_from_dict(record)
                session.add(instance)
                session.flush()
                session.refresh(instance)
                return instance.to_dict()
        except SQLAlchemyError as e:
            raise self._store_error("insert into", table, e)

    def select_by_id(self, table: str, row_id: int, join: Optional[JoinSpec] = None) -> Row:
        """
        Fetch one row by primary key, optionally with its joined partner.

        Raises:
            NotFoundError: If no row has this id
            StoreError: If the query fails
        """
        model = self._model(table)
        self._require_row_id(model, row_id)
        try:
            with session_scope() as session:
                if join is None:
                    instance = session.get(model, row_id)
                    if instance is None:
                        raise NotFoundError(model.__name__, row_id)
                    return instance.to_dict()

                result = (
                    self._joined_query(session, model, join).filter(model.id == row_id).first()
                )
                if result is None:
                    raise NotFoundError(model.__name__, row_id)
                base, partner = result
                return self._merge(base, partner, join)
        except NotFoundError:
            raise
        except SQLAlchemyError as e:
            raise self._store_error("select from", table, e)

    def select_all(
        self,
        table: str,
        filters: Optional[Row] = None,
        join: Optional[JoinSpec] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
    ) -> List[Row]:
        """
        Fetch every row matching equality filters.

        Args:
            table: Table name
            filters: Column -> value equality filters
            join: Optional single-hop join
            order_by: Column to sort on; ties are broken by id in the same direction
            descending: Sort newest/largest first

        Raises:
            StoreError: If the query fails
        """
        model = self._model(table)
        try:
            with session_scope() as session:
                query = (
                    self._joined_query(session, model, join)
                    if join is not None
                    else session.query(model)
                )

                for name, value in (filters or {}).items():
                    query = query.filter(self._column(model, name) == value)

                if order_by is not None:
                    column = self._column(model, order_by)
                    if descending:
                        query = query.order_by(column.desc(), model.id.desc())
                    else:
                        query = query.order_by(column.asc(), model.id.asc())

                if join is None:
                    return [instance.to_dict() for instance in query.all()]
                return [self._merge(base, partner, join) for base, partner in query.all()]
        except SQLAlchemyError as e:
            raise self._store_error("select from", table, e)

    def update(self, table: str, row_id: int, patch: Row) -> Row:
        """
        Apply a column patch to one row.

        Raises:
            NotFoundError: If no row has this id
            StoreError: If the update fails
        """
        model = self._model(table)
        self._require_row_id(model, row_id)
        try:
            with session_scope() as session:
                instance = session.get(model, row_id)
                if instance is None:
                    raise NotFoundError(model.__name__, row_id)

                instance.update_from_dict(patch)
                session.flush()
                session.refresh(instance)
                return instance.to_dict()
        except NotFoundError:
            raise
        except SQLAlchemyError as e:
            raise self._store_error("update", table, e)

    def delete(self, table: str, row_id: int) -> None:
        """
        Hard-delete one row.

        Raises:
            NotFoundError: If no row has this id
            StoreError: If the delete fails
        """
        model = self._model(table)
        self._require_row_id(model, row_id)
        try:
            with session_scope() as session:
                instance = session.get(model, row_id)
                if instance is None:
                    raise NotFoundError(model.__name__, row_id)
                session.delete(instance)
        except NotFoundError:
            raise
        except SQLAlchemyError as e:
            raise self._store_error("delete from", table, e)

    def count(self, table: str, filters: Optional[Row] = None) -> int:
        """Count rows matching equality filters."""
        model = self._model(table)
        try:
            with session_scope() as session:
                query = session.query(model)
                for name, value in (filters or {}).items():
                    query = query.filter(self._column(model, name) == value)
                return query.count()
        except SQLAlchemyError as e:
            raise self._store_error("count", table, e)


# Process-scoped gateway
_gateway: Optional[StoreGateway] = None


def get_gateway() -> StoreGateway:
    """
    Get the global store gateway.

    Returns:
        StoreGateway instance shared by all services
    """
    global _gateway

    if _gateway is None:
        _gateway = StoreGateway()

    return _gateway


def reset_gateway() -> None:
    """Drop the global gateway. Useful for testing."""
    global _gateway
    _gateway = None
