#!/usr/bin/env python3
"""
Apply the SQL files in migrations/ to the quiz database.

Usage:
    python run_migrations.py              # Apply pending migrations
    python run_migrations.py --status     # List applied and pending files
    python run_migrations.py --dry-run    # List what would be applied

Configuration:
    SUPABASE_DB_URL=postgresql://postgres.[project-ref]:[password]@[host]:6543/postgres
"""

import argparse
import hashlib
import sys
from pathlib import Path
from typing import NamedTuple

import psycopg2
from psycopg2 import sql
from rich.console import Console
from rich.table import Table

from shared.config import get_settings

console = Console()

MIGRATIONS_DIR = Path(__file__).parent / "migrations"
MIGRATIONS_TABLE = "schema_migrations"


class Migration(NamedTuple):
    name: str
    path: Path
    checksum: str


def checksum_of(path: Path) -> str:
    return hashlib.sha256(path.read_bytes()).hexdigest()[:16]


def discover_migrations() -> list[Migration]:
    """Every .sql file in migrations/, in file name order."""
    if not MIGRATIONS_DIR.exists():
        console.print(f"[yellow]Warning:[/yellow] {MIGRATIONS_DIR} does not exist")
        return []
    return [
        Migration(path.name, path, checksum_of(path))
        for path in sorted(MIGRATIONS_DIR.glob("*.sql"))
    ]


def connect():
    settings = get_settings()
    if not settings.supabase_db_url:
        console.print("[red]Error:[/red] SUPABASE_DB_URL is not set.")
        sys.exit(1)

    try:
        return psycopg2.connect(settings.supabase_db_url)
    except psycopg2.Error as e:
        console.print(f"[red]Database connection failed:[/red] {e}")
        sys.exit(1)


def ensure_tracking_table(conn) -> None:
    with conn.cursor() as cur:
        cur.execute(
            sql.SQL(
                """
                CREATE TABLE IF NOT EXISTS {} (
                    name TEXT PRIMARY KEY,
                    checksum VARCHAR(16) NOT NULL,
                    applied_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
                )
                """
            ).format(sql.Identifier(MIGRATIONS_TABLE))
        )
    conn.commit()


def applied_migrations(conn) -> dict[str, tuple[str, object]]:
    """name -> (checksum, applied_at)"""
    with conn.cursor() as cur:
        cur.execute(
            sql.SQL("SELECT name, checksum, applied_at FROM {} ORDER BY name").format(
                sql.Identifier(MIGRATIONS_TABLE)
            )
        )
        return {name: (checksum, applied_at) for name, checksum, applied_at in cur.fetchall()}


def pending_migrations(conn) -> list[Migration]:
    applied = applied_migrations(conn)
    pending = []
    for migration in discover_migrations():
        if migration.name not in applied:
            pending.append(migration)
        elif applied[migration.name][0] != migration.checksum:
            console.print(
                f"[yellow]Warning:[/yellow] {migration.name} changed after it was applied"
            )
    return pending


def apply(conn, migration: Migration) -> None:
    """Run one file and record it, in a single transaction."""
    console.print(f"[blue]Applying[/blue] {migration.name}...")
    try:
        with conn.cursor() as cur:
            cur.execute(migration.path.read_text())
            cur.execute(
                sql.SQL("INSERT INTO {} (name, checksum) VALUES (%s, %s)").format(
                    sql.Identifier(MIGRATIONS_TABLE)
                ),
                (migration.name, migration.checksum),
            )
        conn.commit()
    except psycopg2.Error as e:
        conn.rollback()
        console.print(f"[red]✗[/red] {migration.name}: {e}")
        raise
    console.print(f"[green]✓[/green] {migration.name}")


def show_status(conn) -> None:
    applied = applied_migrations(conn)
    pending = pending_migrations(conn)

    if not applied and not pending:
        console.print("[dim]No migrations found.[/dim]")
        return

    table = Table(title="Quiz database migrations")
    table.add_column("Migration", style="cyan")
    table.add_column("Status")
    table.add_column("Applied at")
    for name, (_, applied_at) in applied.items():
        stamp = applied_at.strftime("%Y-%m-%d %H:%M:%S") if applied_at else ""
        table.add_row(name, "[green]applied[/green]", stamp)
    for migration in pending:
        table.add_row(migration.name, "[yellow]pending[/yellow]", "")
    console.print(table)


def main() -> None:
    parser = argparse.ArgumentParser(description="Apply quiz database migrations")
    parser.add_argument("--status", action="store_true", help="Show applied and pending migrations")
    parser.add_argument("--dry-run", action="store_true", help="List pending migrations without applying")
    args = parser.parse_args()

    console.print("[bold]Quiz Database Migrations[/bold]")

    conn = connect()
    try:
        ensure_tracking_table(conn)
        if args.status:
            show_status(conn)
            return

        pending = pending_migrations(conn)
        if not pending:
            console.print("[green]Database is up to date.[/green]")
            return

        for migration in pending:
            if args.dry_run:
                console.print(f"[cyan]Would apply[/cyan] {migration.name}")
            else:
                apply(conn, migration)
    finally:
        conn.close()


if __name__ == "__main__":
    main()
