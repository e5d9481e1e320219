"""
db/ - Database Layer
====================
Owns the PostgreSQL connection (gateway), the connection pool, and schema
provisioning. This layer is the lowest in the architecture and has no
dependencies on other layers.
"""
