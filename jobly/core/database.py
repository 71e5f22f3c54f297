import re
from typing import Any, Dict, List, Sequence

from sqlalchemy import create_engine, text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from jobly.core.config import settings

# Create SQLAlchemy engine
if settings.DATABASE_URL.startswith("sqlite"):
    engine = create_engine(settings.DATABASE_URL, connect_args={"check_same_thread": False})
else:
    engine = create_engine(
        settings.DATABASE_URL,
        pool_pre_ping=True,  # Verify connections before using them
        pool_size=10,  # Connection pool size
        max_overflow=20  # Allow up to 20 connections beyond pool_size
    )

# Create SessionLocal class
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Create Base class for models
Base = declarative_base()

# $1, $2, ... positional placeholders used by the query builders
_POSITIONAL = re.compile(r"\$(\d+)")

PG_UNIQUE_VIOLATION = "23505"


def get_db():
    """
    Dependency function to get database session.
    Used in FastAPI endpoints with Depends(get_db)
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db():
    """
    Initialize database.

    Table creation is left to the deployment's schema scripts; this only
    makes sure models are imported/registered on Base.metadata.
    """
    from jobly.models import company, job, user, application  # noqa: F401


def is_unique_violation(exc: IntegrityError) -> bool:
    """True when the store rejected a write because of a unique constraint."""
    orig = getattr(exc, "orig", None)
    if getattr(orig, "pgcode", None) == PG_UNIQUE_VIOLATION:
        return True
    # psycopg 3 exposes sqlstate instead of pgcode
    if getattr(orig, "sqlstate", None) == PG_UNIQUE_VIOLATION:
        return True
    message = str(orig if orig is not None else exc)
    return "UNIQUE constraint failed" in message or "duplicate key value" in message


class SqlStore:
    """
    Raw parameterized SQL over a SQLAlchemy session.

    Statements use numbered placeholders ($1, $2, ...) and a positional
    parameter sequence; rows come back as plain dicts keyed by column label.
    """

    def __init__(self, session: Session):
        self.session = session

    @property
    def dialect(self) -> str:
        return self.session.get_bind().dialect.name

    def _prepare(self, sql: str, params: Sequence[Any]):
        bound: Dict[str, Any] = {}

        def rename(match: re.Match) -> str:
            index = int(match.group(1))
            if index < 1 or index > len(params):
                raise IndexError(f"placeholder ${index} has no parameter ({len(params)} given)")
            bound[f"p{index}"] = params[index - 1]
            return f":p{index}"

        sql = _POSITIONAL.sub(rename, sql)
        if self.dialect == "sqlite":
            # SQLite's LIKE is already case-insensitive for ASCII
            sql = sql.replace(" ILIKE ", " LIKE ")
        return text(sql), bound

    def execute(self, sql: str, params: Sequence[Any] = ()) -> List[Dict[str, Any]]:
        """
        Execute one statement and return its rows.

        Raises:
            SQLAlchemyError: Store failures propagate unchanged after the
                session is rolled back
        """
        statement, bound = self._prepare(sql, params)
        try:
            result = self.session.execute(statement, bound)
            if not result.returns_rows:
                return []
            return [dict(row._mapping) for row in result]
        except SQLAlchemyError:
            self.session.rollback()
            raise

    def commit(self) -> None:
        self.session.commit()
