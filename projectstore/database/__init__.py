from .database import Base, SessionLocal, engine, session_scope

__all__ = ["Base", "SessionLocal", "engine", "session_scope"]
