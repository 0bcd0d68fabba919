# scripts/backfill_store_pages.py
# Adds the standard pages missing from existing stores; existing pages are never touched
from __future__ import annotations

import argparse
import sys
from pathlib import Path

# --- Ensure repo root is on sys.path so "storebuilder.*" imports work when run as a script
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from sqlalchemy.orm import Session

from storebuilder.core.logging import configure_logging
from storebuilder.db.session import SessionLocal
from storebuilder.services.template_service import initialize_all_stores


def run(dry_run: bool = False) -> None:
    db: Session = SessionLocal()
    try:
        results = initialize_all_stores(db)
        for store_id, created in results.items():
            print(f"  store_id={store_id} pages_created={created}")
        if dry_run:
            db.rollback()
            print(f"[DRY-RUN] {sum(results.values())} pages would be created across {len(results)} stores")
        else:
            db.commit()
            print(f"[OK] {sum(results.values())} pages created across {len(results)} stores")
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def main():
    ap = argparse.ArgumentParser(
        description="Seed every existing store with the standard pages it is missing.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    ap.add_argument("--dry-run", action="store_true", help="Roll back instead of committing")
    args = ap.parse_args()

    configure_logging()
    run(dry_run=args.dry_run)


if __name__ == "__main__":
    main()
