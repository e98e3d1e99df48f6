"""
db/init_db.py
-------------
Creates the target database and the `clientes` table if they do not
already exist. Both steps open and close their own connection, so they
can run before the connection pool is built.
Run this module directly to initialize a fresh database:
    python -m db.init_db
"""

import psycopg2
from psycopg2 import sql

from config import DatabaseConfig, load_config
from utils.logger import get_logger

logger = get_logger(__name__)

DATABASE_EXISTS_SQL = "SELECT 1 FROM pg_database WHERE datname = %s;"

SCHEMA_SQL = """
-- Customers table
CREATE TABLE IF NOT EXISTS clientes (
    id      SERIAL PRIMARY KEY,
    nome    VARCHAR(100) NOT NULL,
    idade   INTEGER,
    uf      CHAR(2)
);
"""


def ensure_database(config: DatabaseConfig) -> bool:
    """
    Create the configured database unless the catalog already lists it.

    Connects to the administrative database, never to the target one.
    The database name is spliced into CREATE DATABASE as a quoted
    identifier; it comes from configuration only, never from user input.

    Returns:
        True if the database was created, False if it already existed.
    """
    db_name = config.database
    conn = psycopg2.connect(**config.connect_kwargs(config.admin_database))
    try:
        # CREATE DATABASE cannot run inside a transaction block.
        conn.autocommit = True
        with conn.cursor() as cur:
            cur.execute(DATABASE_EXISTS_SQL, (db_name,))
            if cur.fetchone() is not None:
                logger.info(f'Database "{db_name}" already exists.')
                return False
            logger.info(f'Database "{db_name}" does not exist. Creating...')
            cur.execute(sql.SQL("CREATE DATABASE {}").format(sql.Identifier(db_name)))
        logger.info(f'Database "{db_name}" created successfully.')
        return True
    finally:
        conn.close()


def ensure_table(config: DatabaseConfig) -> None:
    """
    Execute the schema SQL against the target database.
    Safe to call multiple times (uses IF NOT EXISTS).
    """
    conn = psycopg2.connect(**config.connect_kwargs())
    try:
        with conn.cursor() as cur:
            cur.execute(SCHEMA_SQL)
        conn.commit()
        logger.info('Table "clientes" verified/created successfully.')
    except Exception as e:
        conn.rollback()
        logger.error(f"Failed to initialize schema: {e}")
        raise
    finally:
        conn.close()


def initialize_database(config: DatabaseConfig) -> None:
    """Run the bootstrap steps in order: database first, then table."""
    ensure_database(config)
    ensure_table(config)


if __name__ == "__main__":
    initialize_database(load_config())
    print("Database schema created successfully.")
