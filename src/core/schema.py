"""SQLite schema management (code-first approach)."""

import logging

from src.core import db_client


logger = logging.getLogger(__name__)


# Central list of all collections in the schema, in dependency order
COLLECTIONS = [
    "rider_profiles",
    "delivery_platforms",
    "service_areas",
    "daily_activities",
    "rider_platforms",
    "rider_service_areas",
]

_TABLES: dict[str, str] = {
    "rider_profiles": """
        CREATE TABLE IF NOT EXISTS rider_profiles (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            user_id TEXT,
            name TEXT NOT NULL,
            age INTEGER NOT NULL,
            phone TEXT NOT NULL,
            weekly_goal REAL NOT NULL CHECK (weekly_goal >= 0),
            hours_per_day REAL NOT NULL CHECK (hours_per_day > 0 AND hours_per_day <= 24),
            created TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%fZ', 'now')),
            updated TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%fZ', 'now'))
        )
    """,
    "delivery_platforms": """
        CREATE TABLE IF NOT EXISTS delivery_platforms (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL UNIQUE,
            category TEXT NOT NULL,
            created TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%fZ', 'now'))
        )
    """,
    "service_areas": """
        CREATE TABLE IF NOT EXISTS service_areas (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL UNIQUE,
            created TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%fZ', 'now'))
        )
    """,
    "daily_activities": """
        CREATE TABLE IF NOT EXISTS daily_activities (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            rider_profile_id INTEGER NOT NULL REFERENCES rider_profiles (id),
            activity_date TEXT NOT NULL,
            earnings REAL NOT NULL CHECK (earnings >= 0),
            hours_worked REAL NOT NULL CHECK (hours_worked > 0 AND hours_worked <= 24),
            primary_platform TEXT NOT NULL,
            satisfaction_rating INTEGER NOT NULL CHECK (satisfaction_rating BETWEEN 1 AND 5),
            created TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%fZ', 'now')),
            updated TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%fZ', 'now'))
        )
    """,
    "rider_platforms": """
        CREATE TABLE IF NOT EXISTS rider_platforms (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            rider_profile_id INTEGER NOT NULL REFERENCES rider_profiles (id),
            platform_id INTEGER NOT NULL REFERENCES delivery_platforms (id),
            created TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%fZ', 'now'))
        )
    """,
    "rider_service_areas": """
        CREATE TABLE IF NOT EXISTS rider_service_areas (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            rider_profile_id INTEGER NOT NULL REFERENCES rider_profiles (id),
            service_area_id INTEGER NOT NULL REFERENCES service_areas (id),
            created TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%fZ', 'now'))
        )
    """,
}

_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_activities_rider_date ON daily_activities (rider_profile_id, activity_date)",
    "CREATE INDEX IF NOT EXISTS idx_activities_date ON daily_activities (activity_date)",
]

# Catalog rows inserted on first start
DEFAULT_PLATFORMS: list[tuple[str, str]] = [
    ("Swiggy", "food"),
    ("Zomato", "food"),
    ("Blinkit", "quick_commerce"),
    ("Zepto", "quick_commerce"),
    ("Swiggy Instamart", "quick_commerce"),
    ("Dunzo", "hyperlocal"),
    ("Porter", "logistics"),
    ("Rapido", "mobility"),
    ("Uber", "mobility"),
]

DEFAULT_SERVICE_AREAS: list[str] = [
    "Central",
    "North",
    "South",
    "East",
    "West",
]


async def init_db(*, db_path: str | None = None) -> None:
    """Create tables and indexes, then seed the platform and area catalog."""
    conn = await db_client.get_connection(db_path=db_path)

    for collection in COLLECTIONS:
        await conn.execute(_TABLES[collection])
    for statement in _INDEXES:
        await conn.execute(statement)

    await conn.executemany(
        "INSERT OR IGNORE INTO delivery_platforms (name, category) VALUES (?, ?)",
        DEFAULT_PLATFORMS,
    )
    await conn.executemany(
        "INSERT OR IGNORE INTO service_areas (name) VALUES (?)",
        [(name,) for name in DEFAULT_SERVICE_AREAS],
    )
    await conn.commit()

    logger.info("Database schema initialized", extra={"collections": len(COLLECTIONS)})
