# utils/dependencies.py
from typing import Optional
from fastapi import Depends, Header, HTTPException, Request

from models.schemas import TokenClaims
from services.auth_service import AuthService
from services.chat_service import ChatService
from services.store import ChatStore
from services.token_service import (
    InvalidTokenError,
    MissingTokenError,
    TokenService,
    extract_bearer_token,
)

# Collaborators are created in the app lifespan and kept on app.state

def get_store(request: Request) -> ChatStore:
    return request.app.state.store

def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service

def get_auth_service(
    store: ChatStore = Depends(get_store),
    token_service: TokenService = Depends(get_token_service),
) -> AuthService:
    return AuthService(store, token_service)

def get_chat_service(store: ChatStore = Depends(get_store)) -> ChatService:
    return ChatService(store)

def get_current_user(
    authorization: Optional[str] = Header(None),
    token_service: TokenService = Depends(get_token_service),
) -> TokenClaims:
    """
    Resolve the caller from 'Authorization: Bearer <token>'.

    No token at all is a 401 (go log in); a token that fails verification is
    a 403 (log in again).
    """
    try:
        return token_service.verify(extract_bearer_token(authorization))
    except MissingTokenError:
        raise HTTPException(status_code=401, detail="Access token required")
    except InvalidTokenError:
        raise HTTPException(status_code=403, detail="Invalid or expired token")
