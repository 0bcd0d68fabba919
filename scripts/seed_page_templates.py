# scripts/seed_page_templates.py
# Idempotent: inserts the default page templates, refreshes default_sections on existing ones
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
from storebuilder.seeds.page_templates import DEFAULT_PAGE_TEMPLATES, load_templates_file, upsert_page_templates


def run(file_path: str | None = None) -> None:
    templates = load_templates_file(file_path) if file_path else DEFAULT_PAGE_TEMPLATES
    db: Session = SessionLocal()
    try:
        inserted, updated = upsert_page_templates(db, templates)
        db.commit()
        print(f"[OK] page templates inserted={inserted} updated={updated}")
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def main():
    ap = argparse.ArgumentParser(
        description="Seed the page template catalog.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    ap.add_argument("--file", help="JSON list of templates (defaults to the built-in e-commerce set)")
    args = ap.parse_args()

    configure_logging()
    run(file_path=args.file)


if __name__ == "__main__":
    main()
