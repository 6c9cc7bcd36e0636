import logging
from typing import Callable, TypeVar

from sqlalchemy import create_engine
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.orm.exc import StaleDataError

from studyflow.core import config
from studyflow.core.errors import Conflict, DuplicateRow

logger = logging.getLogger(__name__)

T = TypeVar("T")

connect_args = (
    {"check_same_thread": False} if config.DATABASE_URL.startswith("sqlite") else {}
)
engine = create_engine(config.DATABASE_URL, connect_args=connect_args)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def run_in_transaction(
    db: Session, operation: Callable[[], T], retries: int | None = None
) -> T:
    """
    Run one unit of work and commit it.

    A lost version check (StaleDataError) or a lost lazy-create race
    (DuplicateRow, see flush_new_row) rolls everything back and reruns the
    operation from a fresh read. Once the attempts are used up the caller
    gets Conflict. Anything else, other integrity errors included, rolls
    back and propagates untouched.
    """
    attempts = retries if retries is not None else config.CONFLICT_RETRIES

    for attempt in range(1, attempts + 1):
        try:
            result = operation()
            db.commit()
            return result
        except (StaleDataError, DuplicateRow) as e:
            db.rollback()
            logger.warning(
                "Concurrent update lost (attempt %d/%d): %s", attempt, attempts, e
            )
        except Exception:
            db.rollback()
            raise

    raise Conflict(f"Gave up after {attempts} conflicting attempts")


def flush_new_row(db: Session, row) -> None:
    """
    Insert a lazily created row on its own flush.

    Pending work is flushed first so that an IntegrityError raised here can
    only come from this row, which means a concurrent writer created it.
    """
    db.flush()
    db.add(row)
    try:
        db.flush()
    except IntegrityError as e:
        raise DuplicateRow(str(e.orig)) from e
