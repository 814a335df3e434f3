"""Test suite for OTP Guard.

Test structure:
- unit/: Engine, entities, services and adapters in isolation
  (in-memory stores, injected clock)
- integration/: Real adapters (SQLite via aiosqlite, fakeredis,
  Keycloak over pytest-httpx) and concurrency races
- api/: HTTP endpoints through the FastAPI app with TestClient
"""
