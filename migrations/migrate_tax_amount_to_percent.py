#!/usr/bin/env python3
"""Migration script to convert flat tax amounts into tax percentages.

Older invoices stored tax as a flat amount in an ``invoices.tax`` column.
Invoices now store ``tax_percent`` (a percentage of the subtotal) and the
derived ``tax_amount``. This migration:
- adds the tax_percent and tax_amount columns if they are missing
- sets tax_amount to the old flat amount
- sets tax_percent = tax / subtotal * 100 (0 when the subtotal is 0)

Usage:
    python migrations/migrate_tax_amount_to_percent.py [--db-path PATH]
"""

import sys
from decimal import Decimal
from pathlib import Path

# Add src to path so we can import invoicekit modules
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from sqlalchemy import text, inspect
from invoicekit.database.factories import create_sqlite_database


def column_exists(engine, table_name: str, column_name: str) -> bool:
    """Check if a column exists in a table.

    Args:
        engine: SQLAlchemy engine
        table_name: Name of the table
        column_name: Name of the column

    Returns:
        True if column exists, False otherwise
    """
    inspector = inspect(engine)
    columns = [col["name"] for col in inspector.get_columns(table_name)]
    return column_name in columns


def tax_percent_from_amount(tax: Decimal, subtotal: Decimal) -> Decimal:
    """Express a flat tax amount as a percentage of the subtotal."""
    if subtotal == 0:
        return Decimal("0")
    return tax / subtotal * Decimal("100")


def migrate_database(database_path: str | None = None) -> int:
    """Migrate legacy flat tax amounts to percentages.

    Args:
        database_path: Path to database file. If None, uses default location.

    Returns:
        Number of invoices converted

    Raises:
        Exception: If migration fails
    """
    db = create_sqlite_database(database_path=database_path)
    db.connect()

    try:
        session = db.session_factory()
        try:
            engine = session.bind
            if engine is None:
                raise Exception("Could not get database engine from session")
        finally:
            session.close()

        inspector = inspect(engine)
        if "invoices" not in inspector.get_table_names():
            raise Exception("Table 'invoices' does not exist. Please initialize the database schema first.")

        if not column_exists(engine, "invoices", "tax"):
            print("Nothing to migrate: invoices table has no legacy 'tax' column")
            return 0

        print("Starting migration: converting flat tax amounts to percentages...")

        with engine.begin() as conn:
            if not column_exists(engine, "invoices", "tax_percent"):
                conn.execute(text("ALTER TABLE invoices ADD COLUMN tax_percent VARCHAR NOT NULL DEFAULT '0'"))
                print("  Added column: tax_percent")
            if not column_exists(engine, "invoices", "tax_amount"):
                conn.execute(text("ALTER TABLE invoices ADD COLUMN tax_amount VARCHAR NOT NULL DEFAULT '0'"))
                print("  Added column: tax_amount")

            rows = conn.execute(
                text("SELECT id, subtotal, tax FROM invoices WHERE tax IS NOT NULL AND tax != 0")
            ).fetchall()

            for invoice_id, subtotal, tax in rows:
                tax = Decimal(str(tax))
                percent = tax_percent_from_amount(tax, Decimal(str(subtotal)))
                conn.execute(
                    text("UPDATE invoices SET tax_percent = :percent, tax_amount = :amount WHERE id = :id"),
                    {"percent": format(percent, "f"), "amount": format(tax, "f"), "id": invoice_id},
                )

        print(f"Migration completed successfully! Converted {len(rows)} invoice(s).")
        return len(rows)

    except Exception as e:
        print(f"Migration failed: {e}")
        raise
    finally:
        db.disconnect()


def main():
    """Main entry point for migration script."""
    import argparse

    parser = argparse.ArgumentParser(
        description="Convert flat invoice tax amounts into tax percentages"
    )
    parser.add_argument(
        "--db-path",
        type=str,
        help="Path to database file (overrides INVOICEKIT_DB_PATH environment variable)",
    )
    args = parser.parse_args()

    try:
        migrate_database(database_path=args.db_path)
        return 0
    except Exception as e:
        print(f"\nMigration failed: {e}", file=sys.stderr)
        import traceback
        traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
