# ABOUTME: SQLAlchemy ORM models for posts, options and transients.
# ABOUTME: Stand-ins for the host tables the plugin reads and writes through its store ports.

from datetime import UTC, datetime
from typing import Any

from sqlalchemy import JSON, DateTime, Index, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from homepages.models import Post, PostStatus


def utcnow() -> datetime:
    """Naive UTC timestamp, as stored in timezone-less columns."""
    return datetime.now(UTC).replace(tzinfo=None)


def _as_naive_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(UTC).replace(tzinfo=None)


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class PostRow(Base):
    """A post of any type."""

    __tablename__ = "posts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    post_type: Mapped[str] = mapped_column(String(20), nullable=False, index=True)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="publish")
    title: Mapped[str] = mapped_column(Text, nullable=False, default="")
    content: Mapped[str] = mapped_column(Text, nullable=False, default="")
    featured_media: Mapped[int | None] = mapped_column(Integer, nullable=True)
    published_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)
    modified_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)

    __table_args__ = (
        Index("ix_posts_type_status_date", post_type, status, published_at.desc()),
    )

    def apply(self, post: Post) -> None:
        """Copy model fields onto the row (the id is left to the database)."""
        self.post_type = post.post_type
        self.status = post.status.value
        self.title = post.title
        self.content = post.content
        self.featured_media = post.featured_media
        self.published_at = _as_naive_utc(post.published_at)
        self.modified_at = _as_naive_utc(post.modified_at)

    def to_model(self) -> Post:
        return Post(
            id=self.id,
            post_type=self.post_type,
            status=PostStatus(self.status),
            title=self.title,
            content=self.content,
            featured_media=self.featured_media,
            published_at=self.published_at.replace(tzinfo=UTC),
            modified_at=self.modified_at.replace(tzinfo=UTC),
        )

    def __repr__(self) -> str:
        return f"<PostRow {self.id} {self.post_type}/{self.status}: {self.title[:50]}>"


class OptionRow(Base):
    """A durable site setting."""

    __tablename__ = "options"

    name: Mapped[str] = mapped_column(String(191), primary_key=True)
    value: Mapped[Any] = mapped_column(JSON, nullable=True)

    def __repr__(self) -> str:
        return f"<OptionRow {self.name}={self.value!r}>"


class TransientRow(Base):
    """A cached value with an expiry time."""

    __tablename__ = "transients"

    key: Mapped[str] = mapped_column(String(172), primary_key=True)
    value: Mapped[Any] = mapped_column(JSON, nullable=True)
    expires_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, index=True)

    def __repr__(self) -> str:
        return f"<TransientRow {self.key} expires {self.expires_at}>"
