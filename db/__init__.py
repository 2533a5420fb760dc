"""
db/ - Database Layer
====================
PostgreSQL connection pool, transaction helper and schema creation.
This layer is the lowest in the architecture and has no dependencies on other layers.
"""
