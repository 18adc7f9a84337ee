"""Core framework components - generic interfaces and base classes."""

from .database import Database
from .exceptions import BadRequestError, ErrorType, NotFoundError, TodokitException
from .logging import configure_logging, get_logger
from .manager import BaseManager
from .models import Base, Entity
from .repository import BaseRepository, Repository
from .schemas import CamelModel, EntityIn, EntityOut
from .settings import Settings

__all__ = [
    # Database
    "Database",
    # Repository
    "Repository",
    "BaseRepository",
    # Manager
    "BaseManager",
    # ORM and schemas
    "Base",
    "Entity",
    "CamelModel",
    "EntityIn",
    "EntityOut",
    # Exceptions
    "ErrorType",
    "TodokitException",
    "NotFoundError",
    "BadRequestError",
    # Logging
    "configure_logging",
    "get_logger",
    # Settings
    "Settings",
]
