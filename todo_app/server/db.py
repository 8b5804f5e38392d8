"""Task service database engine and session management."""

from __future__ import annotations

from typing import Dict, Optional

from sqlalchemy import Boolean, Column, Integer, String, Text, create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from todo_app.models import Priority, Task

Base = declarative_base()

# Engines and sessionmakers cached per database URL.
_ENGINES: Dict[str, Engine] = {}
_SESSIONMAKERS: Dict[str, sessionmaker] = {}


class TaskRow(Base):
    __tablename__ = "tasks"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(512), nullable=False)
    description = Column(Text, nullable=True)
    completed = Column(Boolean, nullable=False, default=False)
    priority = Column(Integer, nullable=False, default=int(Priority.LOW))

    def to_task(self) -> Task:
        return Task(
            id=int(self.id),
            title=self.title,
            description=self.description,
            completed=bool(self.completed),
            priority=Priority(int(self.priority)),
        )


def get_engine(database_url: str) -> Engine:
    engine = _ENGINES.get(database_url)
    if engine is not None:
        return engine

    # FastAPI serves sync endpoints from a thread pool.
    connect_args = {}
    if database_url.startswith("sqlite:"):
        connect_args = {"check_same_thread": False}

    engine = create_engine(
        database_url,
        future=True,
        echo=False,
        pool_pre_ping=True,
        connect_args=connect_args,
    )
    _ENGINES[database_url] = engine
    _SESSIONMAKERS[database_url] = sessionmaker(
        bind=engine, autoflush=False, expire_on_commit=False, future=True
    )
    return engine


def get_session(database_url: str) -> Session:
    if database_url not in _SESSIONMAKERS:
        get_engine(database_url)
    return _SESSIONMAKERS[database_url]()


def dispose_engine(database_url: Optional[str] = None) -> None:
    """Dispose cached engines (all of them when no URL is given)."""
    urls = [database_url] if database_url else list(_ENGINES)
    for url in urls:
        engine = _ENGINES.pop(url, None)
        _SESSIONMAKERS.pop(url, None)
        if engine is not None:
            engine.dispose()
