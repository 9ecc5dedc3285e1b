"""
Add absence_payment_type to clinics

Migration to add:
- clinics.absence_payment_type (always / never / confirmed_only)

Existing rows are backfilled from the legacy pays_on_absence flag
(true -> always, false -> never). pays_on_absence stays in place.

Run with: python migrations/add_absence_payment_type.py [--down]
"""

import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlalchemy import inspect, text

from diario.database import engine


def upgrade():
    """Add the column and backfill it"""
    existing_columns = {c["name"] for c in inspect(engine).get_columns("clinics")}

    with engine.begin() as conn:
        if "absence_payment_type" not in existing_columns:
            conn.execute(text("ALTER TABLE clinics ADD COLUMN absence_payment_type VARCHAR(50)"))
            print("✅ Added absence_payment_type column")
        else:
            print("ℹ️  absence_payment_type column already exists")

        result = conn.execute(
            text("""
                UPDATE clinics
                SET absence_payment_type = CASE WHEN pays_on_absence THEN 'always' ELSE 'never' END
                WHERE absence_payment_type IS NULL
            """)
        )
        print(f"✅ Backfilled absence_payment_type on {result.rowcount} clinics")

    print("✅ Migration completed successfully")


def downgrade():
    """Remove the column"""
    with engine.begin() as conn:
        conn.execute(text("ALTER TABLE clinics DROP COLUMN IF EXISTS absence_payment_type"))
        print("✅ Removed absence_payment_type column")


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Manage absence payment type migration")
    parser.add_argument("--down", action="store_true", help="Rollback the migration")
    args = parser.parse_args()

    if args.down:
        print("Rolling back migration...")
        downgrade()
    else:
        print("Running migration...")
        upgrade()
