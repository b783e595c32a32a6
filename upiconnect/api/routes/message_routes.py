"""
Message Routes

GET /messages/conversations - Conversations of the current user
GET /messages/thread - Messages of one (recruiter, student, job) thread
POST /messages - Send a message

Either side may use these routes; the caller's role fills in their own id.
"""

from fastapi import APIRouter, HTTPException, Depends, Query
from typing import List, Optional

from upiconnect.core.auth import get_current_user
from upiconnect.services import message_service
from upiconnect.schemas.schemas import (
    ConversationResponse, ChatMessageCreate, ChatMessageResponse
)

router = APIRouter(prefix="/messages", tags=["Messages"])


def _thread_key(user: dict, recruiter_id: Optional[int], student_id: Optional[int]):
    """Resolve (recruiter_id, student_id) with the caller filling their own side."""
    if user["role"] == "recruiter":
        recruiter_id = user["user_id"]
    else:
        student_id = user["user_id"]

    if recruiter_id is None or student_id is None:
        raise HTTPException(status_code=400, detail="recruiter_id and student_id are required")
    return recruiter_id, student_id


@router.get("/conversations", response_model=List[ConversationResponse])
async def list_conversations(user: dict = Depends(get_current_user)):
    if user["role"] == "recruiter":
        return message_service.list_conversations_for_recruiter(user["user_id"])
    return message_service.list_conversations_for_student(user["user_id"])


@router.get("/thread", response_model=List[ChatMessageResponse])
async def get_thread(
    job_id: int = Query(...),
    recruiter_id: Optional[int] = Query(None),
    student_id: Optional[int] = Query(None),
    user: dict = Depends(get_current_user),
):
    """Whole thread, oldest first."""
    recruiter_id, student_id = _thread_key(user, recruiter_id, student_id)
    if not message_service.can_message(recruiter_id, student_id, job_id):
        raise HTTPException(status_code=404, detail="Conversation not found")
    return message_service.list_messages(recruiter_id, student_id, job_id)


@router.post("", response_model=ChatMessageResponse, status_code=201)
async def send_message(data: ChatMessageCreate, user: dict = Depends(get_current_user)):
    recruiter_id, student_id = _thread_key(user, data.recruiter_id, data.student_id)
    if not message_service.can_message(recruiter_id, student_id, data.job_id):
        raise HTTPException(status_code=404, detail="Conversation not found")

    sender = message_service.SENDER_RECRUITER if user["role"] == "recruiter" else message_service.SENDER_STUDENT
    return message_service.send_message(recruiter_id, student_id, data.job_id, data.content, sender)
