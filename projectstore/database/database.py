from contextlib import contextmanager

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base

from projectstore.config import settings

# check_same_thread is a SQLite-only connect argument
connect_args = {"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(
    settings.DATABASE_URL, echo=settings.SQL_ECHO, connect_args=connect_args
)

# Nothing reaches the database until commit is called explicitly.
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


@contextmanager
def session_scope():
    """
    Provides a transactional scope around a series of repository calls.

    Commits when the block exits normally, rolls back and re-raises otherwise.
    """
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
