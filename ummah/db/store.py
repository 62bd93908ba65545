"""Collection layout: one typed JSON collection per entity type."""
from __future__ import annotations

from pathlib import Path
from typing import Union

from ummah.db.models import (
    Bookmark,
    Comment,
    Community,
    CommunityMember,
    DuaRequest,
    Event,
    EventAttendee,
    Like,
    Post,
    Report,
    User,
    UserBan,
)
from ummah.repositories.json_storage import JsonCollection

COLLECTION_FILES = {
    "users": "users.json",
    "posts": "posts.json",
    "dua_requests": "dua-requests.json",
    "comments": "comments.json",
    "likes": "likes.json",
    "bookmarks": "bookmarks.json",
    "communities": "communities.json",
    "community_members": "community-members.json",
    "events": "events.json",
    "event_attendees": "event-attendees.json",
    "reports": "reports.json",
    "user_bans": "user-bans.json",
}


class FileStore:
    """Typed access to every collection under one data directory."""

    def __init__(self, data_dir: Union[str, Path]) -> None:
        self.data_dir = Path(data_dir)
        self.users = self._collection("users", User)
        self.posts = self._collection("posts", Post)
        self.dua_requests = self._collection("dua_requests", DuaRequest)
        self.comments = self._collection("comments", Comment)
        self.likes = self._collection("likes", Like)
        self.bookmarks = self._collection("bookmarks", Bookmark)
        self.communities = self._collection("communities", Community)
        self.community_members = self._collection("community_members", CommunityMember)
        self.events = self._collection("events", Event)
        self.event_attendees = self._collection("event_attendees", EventAttendee)
        self.reports = self._collection("reports", Report)
        self.user_bans = self._collection("user_bans", UserBan)

    def _collection(self, name, model):
        return JsonCollection(self.data_dir, name, COLLECTION_FILES[name], model)

    def collections(self) -> dict[str, JsonCollection]:
        return {name: getattr(self, name) for name in COLLECTION_FILES}
