"""SQLite schema for rate desk scenarios, assumptions and inventory.

Money columns are TEXT so Decimal values survive the round trip unchanged.
"""

from __future__ import annotations

import sqlite3
from pathlib import Path


def init_rate_desk_db(db_path: Path | str) -> sqlite3.Connection:
    """Create and initialize the rate desk database with WAL mode and indexes.

    Args:
        db_path: Path to the SQLite database file, or ``":memory:"``.

    Returns:
        An open sqlite3.Connection usable from worker threads.
    """
    conn = sqlite3.connect(str(db_path), check_same_thread=False)
    conn.execute("PRAGMA journal_mode=WAL")
    conn.execute("PRAGMA foreign_keys=ON")
    init_rate_desk_tables(conn)
    return conn


def init_rate_desk_tables(conn: sqlite3.Connection) -> None:
    """Create the rate desk tables if they do not already exist.

    Args:
        conn: An open sqlite3.Connection.
    """
    conn.execute("""
        CREATE TABLE IF NOT EXISTS scenarios (
            id TEXT PRIMARY KEY,
            name TEXT NOT NULL,
            description TEXT NOT NULL DEFAULT '',
            created_at TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ', 'now'))
        )
    """)

    conn.execute("""
        CREATE TABLE IF NOT EXISTS scenario_assumptions (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            scenario_id TEXT NOT NULL UNIQUE REFERENCES scenarios (id) ON DELETE CASCADE,
            baseline_midroll_cpm TEXT NOT NULL,
            creator_rev_share TEXT NOT NULL,
            updated_at TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ', 'now'))
        )
    """)

    conn.execute("""
        CREATE TABLE IF NOT EXISTS inventory_units (
            id TEXT PRIMARY KEY,
            name TEXT NOT NULL,
            slug TEXT NOT NULL,
            type TEXT NOT NULL,
            placement TEXT NOT NULL DEFAULT '',
            target_cpm TEXT NOT NULL,
            floor_cpm TEXT NOT NULL,
            ceiling_cpm TEXT NOT NULL,
            expected_monthly_impressions INTEGER NOT NULL DEFAULT 0,
            seasonality_factor TEXT NOT NULL DEFAULT '1.0',
            is_active INTEGER NOT NULL DEFAULT 1,
            updated_at TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ', 'now'))
        )
    """)

    conn.execute("CREATE INDEX IF NOT EXISTS idx_scenarios_name ON scenarios (name)")
    conn.execute(
        "CREATE INDEX IF NOT EXISTS idx_inventory_active_type ON inventory_units (is_active, type)"
    )

    conn.commit()


def close_rate_desk_db(conn: sqlite3.Connection) -> None:
    """Close the rate desk database connection.

    Args:
        conn: The connection to close.
    """
    conn.close()
