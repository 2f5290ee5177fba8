from loguru import logger

from .database import engine, SessionLocal, Base
from .models import *
from projectstore.log import setup_logging

DEFAULT_PROJECT_NAME = "default"

def initialize_db(bind=None):
    """
    Creates every table and inserts the default project.
    Running it on an already initialized database is a no-op.
    """
    bind = bind or engine
    logger.info("Initializing database...")

    Base.metadata.create_all(bind=bind)
    logger.info("Tables created.")

    db = SessionLocal(bind=bind)
    try:
        if db.query(Project).filter(Project.name == DEFAULT_PROJECT_NAME).first():
            logger.info("Default data already present, skipping seed.")
            return

        db.add(Project(name=DEFAULT_PROJECT_NAME))
        db.commit()
        logger.info("Database initialized with project '{}'.", DEFAULT_PROJECT_NAME)

    except Exception as e:
        logger.error("Database initialization failed: {}", e)
        db.rollback()
        raise
    finally:
        db.close()

if __name__ == '__main__':
    setup_logging()
    initialize_db()
