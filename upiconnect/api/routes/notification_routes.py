"""
Notification Routes

POST /notifications/application-accepted - Email the student of an accepted application

Body: {"applicationId": 123}
Only the recruiter who owns the job can trigger the email.
Errors come back as {"error": ...} with 400 / 404 / 500 / 502.
"""

from fastapi import APIRouter, HTTPException, Depends

from upiconnect.core.auth import get_current_recruiter
from upiconnect.services import notification_service, application_service, job_service
from upiconnect.schemas.schemas import ApplicationAcceptedRequest, ApplicationAcceptedResponse

router = APIRouter(prefix="/notifications", tags=["Notifications"])


@router.post("/application-accepted", response_model=ApplicationAcceptedResponse)
async def application_accepted(request: ApplicationAcceptedRequest,
                               recruiter: dict = Depends(get_current_recruiter)):
    if request.applicationId:
        application = application_service.get_application(request.applicationId)
        if application and job_service.get_job_owner(application["job_id"]) != recruiter["recruiter_id"]:
            raise HTTPException(status_code=404, detail="Application not found or access denied")

    return notification_service.notify_application_accepted(request.applicationId)
