# ABOUTME: Pydantic models shared by the plugin core and the host adapters.
# ABOUTME: Defines Post, PostStatus, FrontPageMode, RequestContext and REST request/error schemas.

from datetime import UTC, datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class PostStatus(str, Enum):
    """Publication status of a post."""

    PUBLISH = "publish"
    DRAFT = "draft"
    PENDING = "pending"
    PRIVATE = "private"
    FUTURE = "future"
    TRASH = "trash"
    AUTO_DRAFT = "auto-draft"


class FrontPageMode(str, Enum):
    """What the site root displays (the host's ``show_on_front`` option)."""

    POSTS = "posts"
    PAGE = "page"


class Post(BaseModel):
    """A document held by the host content store."""

    id: int = Field(default=0, ge=0, description="Host-assigned identifier, 0 until saved")
    post_type: str = "post"
    status: PostStatus = PostStatus.PUBLISH
    title: str = ""
    content: str = ""
    featured_media: int | None = None
    published_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    modified_at: datetime = Field(default_factory=lambda: datetime.now(UTC))


class RequestContext(BaseModel):
    """Per-request state the host would otherwise keep in globals."""

    is_admin: bool = False
    is_logged_in: bool = False
    is_preview: bool = False
    params: dict[str, str] = Field(default_factory=dict)


class RestRequest(BaseModel):
    """A request routed to the REST API."""

    method: str = "GET"
    route: str
    params: dict[str, Any] = Field(default_factory=dict)


class RestError(BaseModel):
    """Structured REST error returned instead of a response."""

    code: str
    message: str
    status: int

    def to_response_body(self) -> dict[str, Any]:
        """Render the error the way the REST API serializes errors."""
        return {"code": self.code, "message": self.message, "data": {"status": self.status}}


class PostTypeDefinition(BaseModel):
    """Arguments used to register a post type with the host."""

    labels: dict[str, str] = Field(default_factory=dict)
    public: bool = False
    exclude_from_search: bool = False
    show_ui: bool = False
    show_in_rest: bool = False
    rewrite: bool = True
    menu_icon: str | None = None
    supports: list[str] = Field(default_factory=list)
