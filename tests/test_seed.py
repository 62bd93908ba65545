from __future__ import annotations

import sys
from pathlib import Path

# Garante que o pacote ummah seja importável durante os testes locais
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from ummah.db import seed  # noqa: E402
from ummah.repositories.file_repository import FileRepository  # noqa: E402


def test_first_construction_seeds_demo_data(tmp_path):
    repo = FileRepository(tmp_path / "data")

    users = repo.store.users.all()
    assert [user.username for user in users] == ["demo_user", "admin"]
    assert len(repo.get_posts()) == len(seed.DEMO_POSTS)
    duas = repo.get_dua_requests()
    assert len(duas) == 1
    assert duas[0].users.username == "demo_user"
    # todo conteúdo aponta para usuários existentes
    user_ids = {user.id for user in users}
    assert {post.user_id for post in repo.store.posts.all()} <= user_ids


def test_second_construction_does_not_duplicate(tmp_path):
    FileRepository(tmp_path / "data")
    repo = FileRepository(tmp_path / "data")

    assert len(repo.store.users.all()) == len(seed.DEMO_USERS)
    assert len(repo.store.posts.all()) == len(seed.DEMO_POSTS)


def test_seed_skipped_when_disabled(tmp_path):
    repo = FileRepository(tmp_path / "data", seed_demo_data=False)

    assert repo.store.users.all() == []
    assert seed.seed_demo_data(repo) is True
    assert seed.seed_demo_data(repo) is False


def test_seed_failure_does_not_break_construction(tmp_path):
    data_dir = tmp_path / "data"
    data_dir.mkdir()
    (data_dir / "users.json").write_text("not json", encoding="utf-8")

    repo = FileRepository(data_dir)

    assert repo.check_health() is False
