"""High-level data access helpers backed by JSON collection files."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Iterable, Mapping, Optional, Union

from ummah.db.models import (
    Bookmark,
    Comment,
    CommentWithAuthor,
    Community,
    CommunityMember,
    CommunityWithCreator,
    DuaRequest,
    DuaRequestWithAuthor,
    Event,
    EventAttendee,
    EventWithCreator,
    Like,
    Post,
    PostWithAuthor,
    Report,
    ReportDetails,
    User,
    UserBan,
)
from ummah.db.seed import seed_demo_data
from ummah.db.store import FileStore
from ummah.domain.bans import any_ban_in_force
from ummah.domain.targets import DUA_REQUEST, POST, points_at, resolve_target
from ummah.repositories.json_storage import CollectionUnavailableError, JsonCollection

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 50


def _newest_first(items: Iterable[Any]) -> list:
    return sorted(items, key=lambda item: item.created_at, reverse=True)


def _index(users: Iterable[User]) -> dict[str, User]:
    return {user.id: user for user in users}


class FileRepository:
    """Domain operations over the JSON collections (joins, counters, demo seed)."""

    def __init__(self, data_dir: Union[str, Path], *, seed_demo_data: bool = True) -> None:
        self.store = FileStore(data_dir)
        if seed_demo_data:
            self._initialize_data()

    def _initialize_data(self) -> None:
        try:
            seed_demo_data(self)
        except Exception:
            # the repository stays usable with whatever was written
            logger.exception("Failed to seed demo data into %s", self.store.data_dir)

    def _with_user(self, model, entity, user: Optional[User], key: str = "users"):
        if user is None:
            return None
        return model.model_validate({**entity.model_dump(), key: user})

    def _join_authors(self, model, entities: Iterable[Any], field: str) -> list:
        users = _index(self.store.users.all())
        joined = (self._with_user(model, entity, users.get(getattr(entity, field))) for entity in entities)
        return [item for item in joined if item is not None]

    def _target_collection(self, kind: str) -> JsonCollection:
        return self.store.posts if kind == POST else self.store.dua_requests

    # -------------------------- users --------------------------
    def get_user(self, user_id: str) -> Optional[User]:
        return self.store.users.get(user_id)

    def get_user_by_username(self, username: str) -> Optional[User]:
        return self.store.users.find_one(lambda user: user.username == username)

    def get_user_by_email(self, email: str) -> Optional[User]:
        return self.store.users.find_one(lambda user: user.email == email)

    def create_user(self, data: Mapping[str, Any]) -> User:
        # uniqueness of email/username is left to callers
        return self.store.users.create(data)

    def update_user(self, user_id: str, data: Mapping[str, Any]) -> Optional[User]:
        return self.store.users.update(user_id, data)

    # -------------------------- posts --------------------------
    def get_posts(self, limit: int = DEFAULT_LIMIT) -> list[PostWithAuthor]:
        posts = self._join_authors(PostWithAuthor, self.store.posts.all(), "user_id")
        return _newest_first(posts)[:limit]

    def get_post_by_id(self, post_id: str) -> Optional[PostWithAuthor]:
        post = self.store.posts.get(post_id)
        if not post:
            return None
        return self._with_user(PostWithAuthor, post, self.store.users.get(post.user_id))

    def create_post(self, data: Mapping[str, Any]) -> Post:
        return self.store.posts.create({**data, "likes_count": 0, "comments_count": 0, "shares_count": 0})

    def delete_post(self, post_id: str) -> bool:
        return self.store.posts.delete(post_id)

    # -------------------------- dua requests --------------------------
    def get_dua_requests(self, limit: int = DEFAULT_LIMIT) -> list[DuaRequestWithAuthor]:
        requests = self._join_authors(DuaRequestWithAuthor, self.store.dua_requests.all(), "user_id")
        # stable sort: urgency first, recency within each tier
        ordered = sorted(_newest_first(requests), key=lambda dua: not dua.is_urgent)
        return ordered[:limit]

    def get_dua_request_by_id(self, dua_request_id: str) -> Optional[DuaRequestWithAuthor]:
        dua = self.store.dua_requests.get(dua_request_id)
        if not dua:
            return None
        return self._with_user(DuaRequestWithAuthor, dua, self.store.users.get(dua.user_id))

    def create_dua_request(self, data: Mapping[str, Any]) -> DuaRequest:
        return self.store.dua_requests.create({**data, "prayers_count": 0, "comments_count": 0})

    # -------------------------- comments --------------------------
    def _comments_for(self, kind: str, target_id: str) -> list[CommentWithAuthor]:
        comments = self.store.comments.find(lambda comment: points_at(comment, kind, target_id))
        joined = self._join_authors(CommentWithAuthor, comments, "user_id")
        return sorted(joined, key=lambda comment: comment.created_at)

    def get_comments_by_post_id(self, post_id: str) -> list[CommentWithAuthor]:
        return self._comments_for(POST, post_id)

    def get_comments_by_dua_request_id(self, dua_request_id: str) -> list[CommentWithAuthor]:
        return self._comments_for(DUA_REQUEST, dua_request_id)

    def create_comment(self, data: Mapping[str, Any]) -> Comment:
        kind, target_id = resolve_target(data.get("post_id"), data.get("dua_request_id"))
        comment = self.store.comments.create(data)
        if self._target_collection(kind).increment(target_id, "comments_count") is None:
            logger.warning("Comment %s points at missing %s %s", comment.id, kind, target_id)
        return comment

    # -------------------------- likes --------------------------
    def get_user_like(
        self, user_id: str, post_id: Optional[str] = None, dua_request_id: Optional[str] = None
    ) -> Optional[Like]:
        kind, target_id = resolve_target(post_id, dua_request_id)
        return self.store.likes.find_one(
            lambda like: like.user_id == user_id and points_at(like, kind, target_id)
        )

    def toggle_like(
        self, user_id: str, post_id: Optional[str] = None, dua_request_id: Optional[str] = None
    ) -> dict:
        kind, target_id = resolve_target(post_id, dua_request_id)
        counter = "likes_count" if kind == POST else "prayers_count"
        with self.store.likes.lock:
            existing = self.get_user_like(user_id, post_id, dua_request_id)
            if existing:
                self.store.likes.delete(existing.id)
                delta = -1
            else:
                self.store.likes.create(
                    {"user_id": user_id, "post_id": post_id or None, "dua_request_id": dua_request_id or None}
                )
                delta = 1
        self._target_collection(kind).increment(target_id, counter, delta)
        return {"liked": existing is None}

    # -------------------------- bookmarks --------------------------
    def get_user_bookmark(
        self, user_id: str, post_id: Optional[str] = None, dua_request_id: Optional[str] = None
    ) -> Optional[Bookmark]:
        kind, target_id = resolve_target(post_id, dua_request_id)
        return self.store.bookmarks.find_one(
            lambda bookmark: bookmark.user_id == user_id and points_at(bookmark, kind, target_id)
        )

    def toggle_bookmark(
        self, user_id: str, post_id: Optional[str] = None, dua_request_id: Optional[str] = None
    ) -> dict:
        with self.store.bookmarks.lock:
            existing = self.get_user_bookmark(user_id, post_id, dua_request_id)
            if existing:
                self.store.bookmarks.delete(existing.id)
                return {"bookmarked": False}
            self.store.bookmarks.create(
                {"user_id": user_id, "post_id": post_id or None, "dua_request_id": dua_request_id or None}
            )
            return {"bookmarked": True}

    # -------------------------- communities --------------------------
    def get_communities(self, limit: int = DEFAULT_LIMIT) -> list[CommunityWithCreator]:
        communities = self._join_authors(CommunityWithCreator, self.store.communities.all(), "created_by")
        return _newest_first(communities)[:limit]

    def create_community(self, data: Mapping[str, Any]) -> Community:
        community = self.store.communities.create({**data, "member_count": 1})
        self.store.community_members.create(
            {"community_id": community.id, "user_id": community.created_by, "role": "admin"}
        )
        return community

    def join_community(self, community_id: str, user_id: str) -> CommunityMember:
        # no duplicate check: joining twice counts twice
        membership = self.store.community_members.create(
            {"community_id": community_id, "user_id": user_id, "role": "member"}
        )
        self.store.communities.increment(community_id, "member_count")
        return membership

    # -------------------------- events --------------------------
    def get_events(self, limit: int = DEFAULT_LIMIT) -> list[EventWithCreator]:
        events = self._join_authors(EventWithCreator, self.store.events.all(), "created_by")
        return sorted(events, key=lambda event: event.date)[:limit]

    def create_event(self, data: Mapping[str, Any]) -> Event:
        return self.store.events.create({**data, "attendees_count": 0})

    def attend_event(self, event_id: str, user_id: str) -> EventAttendee:
        attendance = self.store.event_attendees.create({"event_id": event_id, "user_id": user_id})
        self.store.events.increment(event_id, "attendees_count")
        return attendance

    # -------------------------- reports --------------------------
    def create_report(self, data: Mapping[str, Any]) -> Report:
        return self.store.reports.create({**data, "status": "pending"})

    def get_reports(self, limit: int = DEFAULT_LIMIT) -> list[ReportDetails]:
        users = _index(self.store.users.all())
        posts = {post.id: post for post in self.store.posts.all()}
        duas = {dua.id: dua for dua in self.store.dua_requests.all()}
        details = []
        for report in self.store.reports.all():
            reporter = users.get(report.reporter_id)
            reported_user = users.get(report.reported_user_id)
            if not (reporter and reported_user):
                continue
            details.append(
                ReportDetails.model_validate(
                    {
                        **report.model_dump(),
                        "reporter": reporter,
                        "reported_user": reported_user,
                        "post": posts.get(report.post_id) if report.post_id else None,
                        "dua_request": duas.get(report.dua_request_id) if report.dua_request_id else None,
                    }
                )
            )
        return _newest_first(details)[:limit]

    def update_report_status(
        self, report_id: str, status: str, admin_notes: Optional[str] = None
    ) -> Optional[Report]:
        return self.store.reports.update(report_id, {"status": status, "admin_notes": admin_notes})

    # -------------------------- bans --------------------------
    def ban_user(self, data: Mapping[str, Any]) -> UserBan:
        ban = self.store.user_bans.create({**data, "is_active": True})
        logger.info("User %s banned (%s)", ban.user_id, ban.ban_type)
        return ban

    def get_user_bans(self, user_id: str) -> list[UserBan]:
        return self.store.user_bans.find(lambda ban: ban.user_id == user_id and ban.is_active)

    def is_user_banned(self, user_id: str) -> bool:
        return any_ban_in_force(self.get_user_bans(user_id))

    # -------------------------- health --------------------------
    def get_database_status(self) -> dict:
        collections = {}
        for name, collection in self.store.collections().items():
            try:
                collection.all()
                collections[name] = "ok"
            except CollectionUnavailableError:
                collections[name] = "unavailable"
        return {
            "type": "local-file-storage",
            "fileSystem": {
                "status": "active",
                "enabled": True,
                "location": str(self.store.data_dir),
            },
            "collections": collections,
        }

    def check_health(self) -> bool:
        try:
            self.store.users.all()
        except (CollectionUnavailableError, OSError):
            logger.exception("File storage health check failed")
            return False
        return True
