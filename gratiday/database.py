"""Database configuration and connection management."""

import logging
import threading
from collections.abc import Generator, Iterator, Mapping
from contextlib import contextmanager
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import URL, Connection, CursorResult, Engine, make_url
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import ClauseElement, Executable
from sqlalchemy.sql.dml import Insert
from sqlalchemy.sql.elements import TextClause
from sqlalchemy.sql.functions import FunctionElement

from gratiday.config import Settings, get_settings
from gratiday.errors import (
    DatabaseConnectionError,
    IntegrityViolation,
    QueryError,
    StateError,
    classify_integrity_error,
)

logger = logging.getLogger(__name__)

Base: Any = declarative_base()


class random_order(FunctionElement):
    """Dialect-aware ``ORDER BY`` expression for random sampling."""

    name = "random_order"
    inherit_cache = True


@compiles(random_order)
def _compile_random(element, compiler, **kw):
    return "random()"


@compiles(random_order, "mysql")
@compiles(random_order, "mariadb")
def _compile_random_mysql(element, compiler, **kw):
    return "rand()"


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys = ON")
    cursor.close()


@dataclass
class QueryResult:
    """Materialized outcome of a statement.

    Reads fill ``rows``; writes report ``rowcount`` and, for inserts, ``lastrowid``.
    """

    rows: list[dict[str, Any]] = field(default_factory=list)
    rowcount: int = 0
    lastrowid: int | None = None

    def __iter__(self) -> Iterator[dict[str, Any]]:
        return iter(self.rows)

    def __len__(self) -> int:
        return len(self.rows)

    def first(self) -> dict[str, Any] | None:
        return self.rows[0] if self.rows else None

    def scalar(self) -> Any:
        row = self.first()
        if row is None:
            return None
        return next(iter(row.values()))

    @classmethod
    def from_cursor(
        cls, result: CursorResult, statement: Executable, dialect_name: str = ""
    ) -> "QueryResult":
        """Materialize ``result``.

        Raw ``INSERT ... RETURNING`` statements report the first returned column
        as ``lastrowid``. Without ``RETURNING`` a raw insert only reports an id on
        drivers that expose the generated key as the cursor's ``lastrowid``
        (MySQL, SQLite); on PostgreSQL it stays ``None``.
        """
        raw_insert = isinstance(statement, TextClause) and (
            statement.text.lstrip().upper().startswith("INSERT")
        )
        if result.returns_rows:
            rows = [dict(row._mapping) for row in result]
            lastrowid = next(iter(rows[0].values())) if raw_insert and rows else None
            return cls(rows=rows, rowcount=len(rows), lastrowid=lastrowid)

        lastrowid = None
        if isinstance(statement, Insert):
            primary_key = result.inserted_primary_key
            lastrowid = primary_key[0] if primary_key else None
        elif raw_insert and dialect_name != "postgresql":
            lastrowid = result.lastrowid
        return cls(rowcount=result.rowcount, lastrowid=lastrowid)


def _describe(statement: ClauseElement) -> str:
    """Single-line SQL text for diagnostics."""
    try:
        sql = str(statement)
    except SQLAlchemyError:
        sql = statement.__class__.__name__
    return " ".join(sql.split())


class Database:
    """Connection manager over a pooled SQLAlchemy engine.

    Statements outside an explicit transaction lease a pooled connection for
    their own duration. ``begin_transaction()`` pins a connection to the calling
    thread until ``commit()`` or ``rollback()``.
    """

    def __init__(
        self,
        url: str | URL | None = None,
        settings: Settings | None = None,
        **engine_options: Any,
    ):
        self.settings = settings or get_settings()
        self.url = url if url is not None else self.settings.sqlalchemy_url
        self._engine_options = engine_options
        self._engine: Engine | None = None
        self._lock = threading.Lock()
        self._local = threading.local()

    # ------------------------------------------------------------------
    # Connection lifecycle
    # ------------------------------------------------------------------
    def connect(self) -> None:
        """Create the engine and verify the store is reachable. No-op if connected."""
        with self._lock:
            if self._engine is not None:
                return
            engine = None
            try:
                engine = self._create_engine()
                with engine.connect():
                    pass
            except (SQLAlchemyError, ImportError) as exc:
                if engine is not None:
                    engine.dispose()
                logger.error(f"Error connecting to the database: {exc}")
                raise DatabaseConnectionError(f"Could not connect to the database: {exc}") from exc
            self._engine = engine
        logger.info(f"Connected to database {engine.url.render_as_string(hide_password=True)}")

    def disconnect(self) -> None:
        """Dispose of the pool. No-op if not connected."""
        if getattr(self._local, "connection", None) is not None:
            self.rollback()
        with self._lock:
            if self._engine is None:
                return
            self._engine.dispose()
            self._engine = None
        self._local.last_insert_id = 0
        logger.info("Database connection closed")

    def is_connected(self) -> bool:
        return self._engine is not None

    @property
    def engine(self) -> Engine:
        """The underlying engine, connecting first if needed."""
        self.connect()
        return self._engine

    @property
    def in_transaction(self) -> bool:
        return getattr(self._local, "connection", None) is not None

    def _create_engine(self) -> Engine:
        url = make_url(self.url)
        backend = url.get_backend_name()
        connect_args: dict[str, Any] = {}
        options: dict[str, Any] = {"pool_pre_ping": True}

        if backend == "sqlite":
            connect_args["check_same_thread"] = False
        else:
            options.update(
                pool_size=self.settings.db_pool_size,
                max_overflow=self.settings.db_max_overflow,
                pool_timeout=self.settings.db_pool_timeout,
            )
            connect_args["connect_timeout"] = self.settings.db_connect_timeout
            if backend in ("mysql", "mariadb"):
                connect_args["charset"] = self.settings.db_charset
                connect_args["init_command"] = f"SET time_zone = '{self.settings.db_timezone}'"

        options["connect_args"] = connect_args
        options.update(self._engine_options)
        engine = create_engine(url, **options)
        if backend == "sqlite":
            event.listen(engine, "connect", _enable_sqlite_foreign_keys)
        return engine

    @contextmanager
    def _connection(self) -> Iterator[Connection]:
        pinned = getattr(self._local, "connection", None)
        if pinned is not None:
            yield pinned
            return
        with self.engine.begin() as conn:
            yield conn

    # ------------------------------------------------------------------
    # Statements
    # ------------------------------------------------------------------
    def query(
        self,
        statement: str | Executable,
        params: Mapping[str, Any] | None = None,
    ) -> QueryResult:
        """Execute a parameterized statement.

        Strings are treated as SQL with named ``:param`` placeholders; values are
        always bound, never interpolated.
        """
        stmt = text(statement) if isinstance(statement, str) else statement
        try:
            with self._connection() as conn:
                cursor = conn.execute(stmt, dict(params) if params else None)
                result = QueryResult.from_cursor(cursor, stmt, conn.dialect.name)
        except IntegrityError as exc:
            kind = classify_integrity_error(exc)
            sql = _describe(stmt)
            logger.warning(f"Constraint violation ({kind.value}) in query: {sql}")
            raise IntegrityViolation(
                kind,
                f"Constraint violation ({kind.value}) in query: {sql}",
                statement=sql,
                params=params,
                cause=exc,
            ) from exc
        except SQLAlchemyError as exc:
            sql = _describe(stmt)
            names = ", ".join(sorted(params)) if params else "none"
            logger.error(f"Error in SQL query: {exc.__class__.__name__}: {sql} (params: {names})")
            raise QueryError(
                f"Query failed: {exc.__class__.__name__}: {sql}",
                statement=sql,
                params=params,
                cause=exc,
            ) from exc

        if result.lastrowid is not None:
            self._local.last_insert_id = result.lastrowid
        return result

    def get_last_insert_id(self) -> int:
        """Identifier generated by the last insert issued from this thread."""
        if self._engine is None:
            raise StateError("No active database connection")
        return getattr(self._local, "last_insert_id", 0)

    # ------------------------------------------------------------------
    # Transactions
    # ------------------------------------------------------------------
    def begin_transaction(self) -> None:
        if self.in_transaction:
            raise StateError("A transaction is already in progress")
        try:
            conn = self.engine.connect()
            self._local.transaction = conn.begin()
        except SQLAlchemyError as exc:
            raise QueryError(f"Could not begin transaction: {exc}", cause=exc) from exc
        self._local.connection = conn

    def commit(self) -> None:
        if not self.in_transaction:
            return
        try:
            self._local.transaction.commit()
        except SQLAlchemyError as exc:
            raise QueryError(f"Commit failed: {exc}", cause=exc) from exc
        finally:
            self._release()

    def rollback(self) -> None:
        if not self.in_transaction:
            return
        try:
            self._local.transaction.rollback()
        except SQLAlchemyError as exc:
            raise QueryError(f"Rollback failed: {exc}", cause=exc) from exc
        finally:
            self._release()

    def _release(self) -> None:
        conn = self._local.connection
        self._local.connection = None
        self._local.transaction = None
        conn.close()

    @contextmanager
    def transaction(self) -> Iterator["Database"]:
        """Run the block in one transaction; joins an enclosing one if present."""
        if self.in_transaction:
            yield self
            return
        self.begin_transaction()
        try:
            yield self
        except BaseException:
            self.rollback()
            raise
        self.commit()


@lru_cache
def get_database() -> Database:
    """Process-wide default handle built from settings."""
    return Database()


def get_db() -> Generator[Database, None, None]:
    """Dependency that provides the database handle."""
    yield get_database()


def init_db(db: Database | None = None) -> None:
    """Initialize the database by creating all tables."""
    # Import all models here so they are registered with Base.metadata
    from gratiday import models  # noqa: F401

    db = db or get_database()
    Base.metadata.create_all(bind=db.engine)
