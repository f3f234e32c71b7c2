"""
Boundary layer for external system integrations.

Holds the database adapter: ORM models, CRUD operations and connection
management.
"""
