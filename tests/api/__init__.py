"""API tests package.

End-to-end tests for REST API endpoints using TestClient.
Tests the complete request/response cycle including:
- Request validation (422 problem details)
- Handler orchestration over in-memory adapters
- RFC 7807 error responses and headers
- HTTP status codes
"""
