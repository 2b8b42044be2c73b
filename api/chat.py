# api/chat.py
import traceback
from typing import List
from fastapi import APIRouter, Depends, HTTPException

from models.chat import ChatMessage
from models.schemas import ChatRequest, ChatResponse, TokenClaims
from services.chat_service import ChatService
from utils.dependencies import get_chat_service, get_current_user

router = APIRouter(prefix="/chat", tags=["chat"])

@router.post("", response_model=ChatResponse)
async def chat(
    request: ChatRequest,
    user: TokenClaims = Depends(get_current_user),
    chat_service: ChatService = Depends(get_chat_service),
):
    """Store the user's message and answer with a canned reply"""
    if not request.message or not request.message.strip():
        raise HTTPException(status_code=400, detail="Message is required")

    try:
        response = await chat_service.handle_turn(user.user_id, request.message)
        return ChatResponse(response=response)
    except Exception as e:
        print(f"❌ Error in chat for user {user.user_id}: {e}")
        traceback.print_exc()
        raise HTTPException(status_code=500, detail="Internal server error")

@router.get("/history", response_model=List[ChatMessage])
async def get_chat_history(
    user: TokenClaims = Depends(get_current_user),
    chat_service: ChatService = Depends(get_chat_service),
):
    """Get the caller's chat history, oldest first"""
    try:
        return await chat_service.get_history(user.user_id)
    except Exception as e:
        print(f"❌ Error getting chat history: {e}")
        traceback.print_exc()
        raise HTTPException(status_code=500, detail="Internal server error")
