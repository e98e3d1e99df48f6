"""
repositories/customer_repo.py
-----------------------------
Data access layer for customers.
All SQL queries related to the `clientes` table live here.
"""

from db.connection import PoolManager
from models.customer import Customer
from utils.logger import get_logger

logger = get_logger(__name__)

_COLUMNS = "id, nome, idade, uf"


class CustomerRepository:
    """Repository for CRUD operations on the clientes table."""

    def __init__(self, pool: PoolManager):
        self.pool = pool

    # ── READ ──────────────────────────────────────────────

    def list_customers(self) -> list[Customer]:
        """Fetch every customer, ordered by id."""
        sql = f"SELECT {_COLUMNS} FROM clientes ORDER BY id;"
        with self.pool.connection() as conn:
            with conn.cursor() as cur:
                cur.execute(sql)
                return [self._row_to_customer(r) for r in cur.fetchall()]

    def get_customer(self, customer_id: int) -> list[Customer]:
        """
        Fetch a customer by ID.

        Returns:
            A list holding the matching customer, or an empty list.
        """
        sql = f"SELECT {_COLUMNS} FROM clientes WHERE id = %s;"
        with self.pool.connection() as conn:
            with conn.cursor() as cur:
                cur.execute(sql, (customer_id,))
                return [self._row_to_customer(r) for r in cur.fetchall()]

    # ── CREATE ────────────────────────────────────────────

    def insert_customer(self, customer: Customer) -> None:
        """
        Insert a new customer.

        The generated id is not read back; list or query to find it.
        """
        sql = "INSERT INTO clientes (nome, idade, uf) VALUES (%s, %s, %s);"
        with self.pool.connection() as conn:
            try:
                with conn.cursor() as cur:
                    cur.execute(sql, (customer.nome, customer.idade, customer.uf))
            except Exception as e:
                logger.error(f"Failed to insert customer {customer.nome!r}: {e}")
                raise
        logger.info(f"Inserted customer {customer.nome!r}")

    # ── UPDATE ────────────────────────────────────────────

    def update_customer(self, customer_id: int, customer: Customer) -> int:
        """
        Overwrite nome, idade and uf of an existing customer.

        Returns:
            Number of rows updated (0 when the id does not exist).
        """
        sql = "UPDATE clientes SET nome = %s, idade = %s, uf = %s WHERE id = %s;"
        with self.pool.connection() as conn:
            try:
                with conn.cursor() as cur:
                    cur.execute(sql, (customer.nome, customer.idade, customer.uf, customer_id))
                    updated = cur.rowcount
            except Exception as e:
                logger.error(f"Failed to update customer #{customer_id}: {e}")
                raise
        logger.info(f"Updated customer #{customer_id} ({updated} row(s))")
        return updated

    def replace_customer(self, customer_id: int, customer: Customer) -> int:
        """Replace every mutable field of a customer. Same as update_customer."""
        return self.update_customer(customer_id, customer)

    # ── DELETE ────────────────────────────────────────────

    def delete_customer(self, customer_id: int) -> int:
        """
        Delete a customer by ID.

        Returns:
            Number of rows deleted (0 when the id does not exist).
        """
        sql = "DELETE FROM clientes WHERE id = %s;"
        with self.pool.connection() as conn:
            try:
                with conn.cursor() as cur:
                    cur.execute(sql, (customer_id,))
                    deleted = cur.rowcount
            except Exception as e:
                logger.error(f"Failed to delete customer #{customer_id}: {e}")
                raise
        if deleted:
            logger.info(f"Deleted customer #{customer_id}")
        return deleted

    # ── HELPERS ───────────────────────────────────────────

    @staticmethod
    def _row_to_customer(row: tuple) -> Customer:
        """Convert a database row tuple to a Customer domain object."""
        return Customer(
            id=row[0],
            nome=row[1],
            idade=row[2],
            uf=row[3],
        )
