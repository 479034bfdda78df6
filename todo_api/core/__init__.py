"""Core application components."""

from .config import Settings, settings
from .database import (
    AsyncSessionLocal,
    create_engine,
    create_session_factory,
    drop_db,
    engine,
    init_db,
)

__all__ = [
    "settings",
    "Settings",
    "engine",
    "AsyncSessionLocal",
    "create_engine",
    "create_session_factory",
    "init_db",
    "drop_db",
]
