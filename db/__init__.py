"""
db/ - Database Layer
====================
Bootstraps the `clientes` schema and owns the shared PostgreSQL connection pool.
Everything above this layer borrows connections through a PoolManager.
"""
