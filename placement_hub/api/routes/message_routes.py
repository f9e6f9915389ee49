"""
Message Routes

POST /messages/send - Send a direct message
GET /messages/conversations - One entry per counterpart, newest first
GET /messages/history/{account_id} - Full thread with another account (marks it read)
GET /messages/unread/count - Unread messages addressed to the caller
"""

from fastapi import APIRouter, Depends

from placement_hub.core.auth import Identity, get_current_user
from placement_hub.services.message_service import MessageService
from placement_hub.schemas.schemas import (
    ConversationListResponse, CountResponse, MessageCreate, MessageHistoryResponse, MessageSentResponse
)

router = APIRouter(prefix="/messages", tags=["Messages"])


@router.post("/send", response_model=MessageSentResponse, status_code=201)
async def send_message(message: MessageCreate, user: Identity = Depends(get_current_user)):
    sent = MessageService().send(user, message.recipient_id, message.content)
    return MessageSentResponse(message="Message sent", message_data=sent)


@router.get("/conversations", response_model=ConversationListResponse)
async def conversations(user: Identity = Depends(get_current_user)):
    return ConversationListResponse(conversations=MessageService().conversations(user))


@router.get("/history/{account_id}", response_model=MessageHistoryResponse)
async def history(account_id: str, user: Identity = Depends(get_current_user)):
    return MessageHistoryResponse(messages=MessageService().history(user, account_id))


@router.get("/unread/count", response_model=CountResponse)
async def unread_count(user: Identity = Depends(get_current_user)):
    return CountResponse(count=MessageService().unread_count(user))
