"""
API Routes - Combines all route modules into single router.
"""

from fastapi import APIRouter

from upiconnect.api.routes.auth_routes import router as auth_router
from upiconnect.api.routes.student_routes import router as student_router
from upiconnect.api.routes.recruiter_routes import router as recruiter_router
from upiconnect.api.routes.job_routes import router as job_router
from upiconnect.api.routes.message_routes import router as message_router
from upiconnect.api.routes.notification_routes import router as notification_router

# Main API router
api_router = APIRouter()

# Include all sub-routers
api_router.include_router(auth_router)
api_router.include_router(student_router)
api_router.include_router(recruiter_router)
api_router.include_router(job_router)
api_router.include_router(message_router)
api_router.include_router(notification_router)
