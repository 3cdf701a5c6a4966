# customer_api/domain/__init__.py
"""
Domain entities and exceptions, independent of HTTP and the database.
"""
