"""Demo data written on the first run against an empty data directory."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover
    from ummah.repositories.file_repository import FileRepository

logger = logging.getLogger(__name__)

DEMO_USERS = [
    {
        "email": "demo@islamic-platform.com",
        "name": "Demo User",
        "username": "demo_user",
        "avatar_url": None,
        "bio": "A brother committed to Islamic values",
        "location": "Istanbul",
        "website": None,
        "verified": True,
        "role": "user",
    },
    {
        "email": "admin@islamic-platform.com",
        "name": "Platform Admin",
        "username": "admin",
        "avatar_url": None,
        "bio": "Administrator of the Islamic social platform",
        "location": "Istanbul",
        "website": None,
        "verified": True,
        "role": "admin",
    },
]

# (author index into DEMO_USERS, post fields)
DEMO_POSTS = [
    (0, {
        "content": "Assalamu alaikum brothers and sisters! Happy to be part of this platform. "
                   "May Allah unite us all in goodness.",
        "type": "text",
        "media_url": None,
        "category": "Greetings",
        "tags": ["salam", "brotherhood", "goodness"],
    }),
    (1, {
        "content": "Welcome to our Islamic social platform! Share something beautiful and "
                   "connect with your brothers and sisters.",
        "type": "text",
        "media_url": None,
        "category": "Announcement",
        "tags": ["welcome", "platform", "announcement"],
    }),
    (0, {
        "content": 'Read a beautiful hadith today: "A Muslim is the one from whose tongue and '
                   'hands the Muslims are safe." (Bukhari)',
        "type": "text",
        "media_url": None,
        "category": "Hadith",
        "tags": ["hadith", "islam", "advice"],
    }),
]

DEMO_DUA_REQUESTS = [
    (0, {
        "title": "Dua request for health",
        "content": "Dear brothers and sisters, could you make dua for my health? "
                   "May Allah grant shifa, insha'Allah.",
        "category": "Health",
        "is_urgent": False,
        "is_anonymous": False,
        "tags": ["health", "shifa", "dua"],
    }),
]


def seed_demo_data(repo: "FileRepository") -> bool:
    """Create demo users, then their posts and prayer requests. Returns False when users already exist."""
    if repo.store.users.all():
        return False
    logger.info("Seeding demo data into %s", repo.store.data_dir)

    users = [repo.create_user(data) for data in DEMO_USERS]
    for author, data in DEMO_POSTS:
        repo.create_post({**data, "user_id": users[author].id})
    for author, data in DEMO_DUA_REQUESTS:
        repo.create_dua_request({**data, "user_id": users[author].id})

    logger.info(
        "Demo data ready: %d users, %d posts, %d dua requests",
        len(users),
        len(DEMO_POSTS),
        len(DEMO_DUA_REQUESTS),
    )
    return True
