# ABOUTME: Repository classes implementing the host store ports on SQLAlchemy.
# ABOUTME: Provides PostRepository, OptionRepository and TransientRepository.

from collections.abc import Callable
from datetime import datetime, timedelta
from typing import Any

from sqlalchemy import delete, select
from sqlalchemy.orm import Session, sessionmaker

from homepages.db.models import OptionRow, PostRow, TransientRow, utcnow
from homepages.db.session import get_session
from homepages.host.query import PostCriteria
from homepages.models import Post


class PostRepository:
    """Repository for post reads and writes."""

    def __init__(self, session_factory: sessionmaker[Session]):
        self.session_factory = session_factory

    def save(self, post: Post) -> Post:
        """Save a post (insert when its id is 0, update otherwise)."""
        with get_session(self.session_factory) as session:
            row = session.get(PostRow, post.id) if post.id else None
            if row is None:
                row = PostRow(id=post.id or None)
                session.add(row)
            row.apply(post)
            session.flush()
            return row.to_model()

    def get(self, post_id: int) -> Post | None:
        """Get post by ID."""
        with get_session(self.session_factory) as session:
            row = session.get(PostRow, post_id)
            return row.to_model() if row else None

    def find(self, criteria: PostCriteria) -> list[Post]:
        """List posts matching the criteria, newest first."""
        query = select(PostRow)
        if criteria.ids is not None:
            query = query.where(PostRow.id.in_(criteria.ids))
        if criteria.post_types is not None:
            query = query.where(PostRow.post_type.in_(criteria.post_types))
        if criteria.statuses is not None:
            query = query.where(PostRow.status.in_([s.value for s in criteria.statuses]))
        query = query.order_by(PostRow.published_at.desc(), PostRow.id.desc())
        if criteria.limit is not None:
            query = query.limit(criteria.limit)
        if criteria.offset:
            query = query.offset(criteria.offset)

        with get_session(self.session_factory) as session:
            return [row.to_model() for row in session.execute(query).scalars().all()]


class OptionRepository:
    """Repository for durable options."""

    def __init__(self, session_factory: sessionmaker[Session]):
        self.session_factory = session_factory

    def get(self, name: str, default: Any = None) -> Any:
        with get_session(self.session_factory) as session:
            row = session.get(OptionRow, name)
            return default if row is None else row.value

    def update(self, name: str, value: Any) -> None:
        with get_session(self.session_factory) as session:
            session.merge(OptionRow(name=name, value=value))


class TransientRepository:
    """Repository for expiring cache entries."""

    def __init__(
        self,
        session_factory: sessionmaker[Session],
        clock: Callable[[], datetime] = utcnow,
    ):
        self.session_factory = session_factory
        self.clock = clock

    def get(self, key: str) -> Any | None:
        """Get a live value; expired rows are deleted and read as a miss."""
        with get_session(self.session_factory) as session:
            row = session.get(TransientRow, key)
            if row is None:
                return None
            if row.expires_at <= self.clock():
                session.delete(row)
                return None
            return row.value

    def set(self, key: str, value: Any, ttl: int) -> None:
        expires_at = self.clock() + timedelta(seconds=ttl)
        with get_session(self.session_factory) as session:
            session.merge(TransientRow(key=key, value=value, expires_at=expires_at))

    def delete(self, key: str) -> bool:
        """Delete a transient. Returns True if it existed."""
        with get_session(self.session_factory) as session:
            result = session.execute(delete(TransientRow).where(TransientRow.key == key))
            return result.rowcount > 0
