# tests/conftest.py
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from projectstore.database import Base
from projectstore.database import models

# ===================================================================
#  In-memory SQLite database shared by the repository tests
# ===================================================================

@pytest.fixture
def engine():
    """Creates a fresh in-memory database with every table for each test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()

@pytest.fixture
def db_session(engine):
    """A session bound to the in-memory database."""
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()

@pytest.fixture
def project(db_session) -> models.Project:
    project = models.Project(name="demo")
    db_session.add(project)
    db_session.commit()
    return project

@pytest.fixture
def other_project(db_session) -> models.Project:
    project = models.Project(name="other")
    db_session.add(project)
    db_session.commit()
    return project
