"""Pydantic models for the entities persisted as JSON collections."""
from __future__ import annotations

from datetime import datetime
from typing import Annotated, List, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict, Field

from ummah.core.utils import as_utc

# Stored timestamps are always UTC; naive input is read as UTC.
UtcDatetime = Annotated[datetime, AfterValidator(as_utc)]


class Entity(BaseModel):
    """Fields every stored record carries; unknown fields are kept as-is."""

    model_config = ConfigDict(extra="allow")

    id: str = ""
    created_at: Optional[UtcDatetime] = None
    updated_at: Optional[UtcDatetime] = None


class User(Entity):
    email: str
    username: str
    name: str = ""
    role: str = "user"
    verified: bool = False
    avatar_url: Optional[str] = None
    bio: Optional[str] = None
    location: Optional[str] = None
    website: Optional[str] = None


class Post(Entity):
    user_id: str
    content: str = ""
    type: str = "text"
    media_url: Optional[str] = None
    category: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    likes_count: int = 0
    comments_count: int = 0
    shares_count: int = 0


class DuaRequest(Entity):
    user_id: str
    title: str = ""
    content: str = ""
    category: Optional[str] = None
    is_urgent: bool = False
    is_anonymous: bool = False
    tags: List[str] = Field(default_factory=list)
    prayers_count: int = 0
    comments_count: int = 0


class Comment(Entity):
    user_id: str
    post_id: Optional[str] = None
    dua_request_id: Optional[str] = None
    content: str = ""


class Like(Entity):
    user_id: str
    post_id: Optional[str] = None
    dua_request_id: Optional[str] = None


class Bookmark(Entity):
    user_id: str
    post_id: Optional[str] = None
    dua_request_id: Optional[str] = None


class Community(Entity):
    name: str = ""
    description: Optional[str] = None
    category: Optional[str] = None
    created_by: str
    member_count: int = 0


class CommunityMember(Entity):
    community_id: str
    user_id: str
    role: str = "member"


class Event(Entity):
    title: str = ""
    description: Optional[str] = None
    date: UtcDatetime
    location: Optional[str] = None
    created_by: str
    attendees_count: int = 0


class EventAttendee(Entity):
    event_id: str
    user_id: str


class Report(Entity):
    reporter_id: str
    reported_user_id: str
    post_id: Optional[str] = None
    dua_request_id: Optional[str] = None
    reason: str = ""
    description: Optional[str] = None
    status: str = "pending"
    admin_notes: Optional[str] = None


class UserBan(Entity):
    user_id: str
    banned_by: Optional[str] = None
    reason: Optional[str] = None
    ban_type: str = "temporary"
    expires_at: Optional[UtcDatetime] = None
    is_active: bool = True


# -------------------------- joined read models --------------------------
class PostWithAuthor(Post):
    users: User


class DuaRequestWithAuthor(DuaRequest):
    users: User


class CommentWithAuthor(Comment):
    users: User


class CommunityWithCreator(Community):
    users: User


class EventWithCreator(Event):
    users: User


class ReportDetails(Report):
    """
    Report with its joined users and content.

    Joined keys are snake_case (`reported_user`, `dua_request`); clients that
    expect `reportedUser`/`duaRequest` must map them.
    """

    reporter: User
    reported_user: User
    post: Optional[Post] = None
    dua_request: Optional[DuaRequest] = None
