"""
repositories/ - Data Access Layer
==================================
Each repository encapsulates all SQL queries for a specific domain entity.
Repositories receive a gateway, bind every value as a query parameter,
and return domain model objects.
"""
