"""
Schemas module - Request/Response schemas for API endpoints.

Everything lives in schemas.py; import from there:
    from upiconnect.schemas.schemas import JobCreate, JobResponse
"""
