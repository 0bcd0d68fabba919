# scripts/create_store.py
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional

# --- Ensure repo root is on sys.path so "storebuilder.*" imports work when run as a script
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from sqlalchemy.orm import Session

from storebuilder.core.logging import configure_logging
from storebuilder.db.session import SessionLocal
from storebuilder.schemas.store import StoreCreate
from storebuilder.services.store_service import create_store, get_store_by_slug


def run(*, slug: str, name: str, owner_id: int, business_type: Optional[str], business_category: Optional[str]) -> None:
    db: Session = SessionLocal()
    try:
        existing = get_store_by_slug(db, slug)
        if existing:
            print(f"[SKIP] Store already exists id={existing.id} slug={existing.slug}")
            return
        store = create_store(
            db,
            owner_id=owner_id,
            payload=StoreCreate(
                slug=slug, name=name, business_type=business_type, business_category=business_category
            ),
        )
        db.commit()
        print(f"[OK] Store id={store.id} slug={store.slug} owner={owner_id} pages={len(store.pages)}")
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def main():
    ap = argparse.ArgumentParser(
        description="Create a store with its owner, default theme and standard pages.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    ap.add_argument("--slug", required=True, help="Store slug (e.g., acme)")
    ap.add_argument("--name", required=True, help="Store name (e.g., 'Acme Shop')")
    ap.add_argument("--owner-id", type=int, required=True, help="User id of the owner (JWT subject)")
    ap.add_argument("--business-type", default=None, help="Business type used to pick page templates")
    ap.add_argument("--business-category", default=None, help="Business category")
    args = ap.parse_args()

    configure_logging()
    run(
        slug=args.slug,
        name=args.name,
        owner_id=args.owner_id,
        business_type=args.business_type,
        business_category=args.business_category,
    )


if __name__ == "__main__":
    main()
