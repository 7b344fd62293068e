"""Integration tests against real databases.

SQLite runs on temporary files; PostgreSQL runs in containers and is skipped
when Docker is unavailable.
"""
