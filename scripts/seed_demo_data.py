#!/usr/bin/env python3
"""
Seed a data directory with the demo users/posts/dua requests and print its status.

Uso:
  python scripts/seed_demo_data.py [--data-dir ./data] [--status-only]
"""
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

# Garantir que o pacote ummah seja importável quando rodado diretamente
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from ummah.core.config import get_settings
from ummah.core.log import configure_logging
from ummah.db.seed import seed_demo_data
from ummah.repositories.file_repository import FileRepository


def main() -> None:
    settings = get_settings()
    ap = argparse.ArgumentParser(description="Seed demo data into the JSON file storage")
    ap.add_argument("--data-dir", default=str(settings.data_dir), help="Diretorio dos arquivos JSON")
    ap.add_argument("--status-only", action="store_true", help="Apenas mostra o status, sem semear")
    args = ap.parse_args()

    configure_logging(settings.log_level)
    repo = FileRepository(args.data_dir, seed_demo_data=False)
    if not args.status_only:
        if seed_demo_data(repo):
            print(f"OK: demo data written to {repo.store.data_dir}")
        else:
            print("Users already present; nothing seeded")
    if not repo.check_health():
        raise SystemExit("Storage unavailable (see log)")
    print(json.dumps(repo.get_database_status(), indent=2))


if __name__ == "__main__":
    try:
        main()
    except Exception as exc:  # pragma: no cover - uso CLI
        sys.stderr.write(f"Erro: {exc}\n")
        raise SystemExit(1)
