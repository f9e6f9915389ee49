"""
Schemas module - Request/Response schemas for API endpoints.

Difference from the service layer:
- Services: read and write raw MongoDB documents
- Schemas: API contract (what client sends/receives)
"""
