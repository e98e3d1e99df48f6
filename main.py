"""
main.py
-------
Entry point for the customers database layer.

Responsibilities:
    - Bootstrap the target database and the `clientes` table (single attempt).
    - Open the shared connection pool and confirm it answers.
    - Close the pool on shutdown.
"""

import sys

from config import ConfigError, load_config
from db.connection import PoolManager
from db.init_db import initialize_database
from repositories.customer_repo import CustomerRepository
from utils.logger import get_logger

logger = get_logger(__name__)


def main() -> int:
    """Bootstrap the schema and verify the pool. Returns the exit status."""

    # ── 1. Configuration ──────────────────────────────────
    try:
        config = load_config()
    except ConfigError as e:
        logger.error(f"Invalid configuration: {e}")
        return 1

    # ── 2. Schema bootstrap ───────────────────────────────
    logger.info("Initializing database...")
    try:
        initialize_database(config)
    except Exception:
        logger.exception("Error during database initialization")
        return 1

    # ── 3. Connection pool ────────────────────────────────
    pool = PoolManager(config)
    try:
        pool.open()
        customers = CustomerRepository(pool).list_customers()
    except Exception:
        logger.exception("Error while opening the connection pool")
        return 1
    finally:
        pool.close()

    logger.info(f"Database ready: {len(customers)} customer(s) stored.")
    for customer in customers:
        logger.debug(f"  {customer}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
