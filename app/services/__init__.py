# Services package init
"""
Words API — Services Layer
============================

What:  Business logic layer sitting between routes (HTTP) and database (persistence).
Why:   Routes handle HTTP, services own the SQL and storage error translation.

Service Inventory:
    - WordService: list and add words
"""
