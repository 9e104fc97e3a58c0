"""Rate desk persistence package.

Provides the SQLite schema, the repository used by the pricing engine, and
the YAML seed loader for administrative data.
"""

from ratedesk.store.repository import RateDeskRepository
from ratedesk.store.schema import close_rate_desk_db, init_rate_desk_db, init_rate_desk_tables
from ratedesk.store.seed import SeedData, apply_seed, load_seed_file

__all__ = [
    "RateDeskRepository",
    "SeedData",
    "apply_seed",
    "close_rate_desk_db",
    "init_rate_desk_db",
    "init_rate_desk_tables",
    "load_seed_file",
]
