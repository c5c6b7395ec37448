"""
Task Tracker API package.

The FastAPI application lives in `src.tasks_api.main`; the authoritative
in-memory store lives in `src.tasks_api.repositories`.
"""
