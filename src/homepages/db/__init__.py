# ABOUTME: Database module initialization.
# ABOUTME: Exports ORM models, session helpers and store repositories.

from homepages.db.models import Base, OptionRow, PostRow, TransientRow
from homepages.db.repository import OptionRepository, PostRepository, TransientRepository
from homepages.db.session import get_session, get_session_factory, init_db

__all__ = [
    "Base",
    "OptionRepository",
    "OptionRow",
    "PostRepository",
    "PostRow",
    "TransientRepository",
    "TransientRow",
    "get_session",
    "get_session_factory",
    "init_db",
]
