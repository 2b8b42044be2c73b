# api/auth.py
import traceback
from fastapi import APIRouter, Depends, HTTPException

from models.schemas import AuthResponse, Credentials
from services.auth_service import AuthService, InvalidCredentialsError
from services.store import UsernameTakenError
from utils.dependencies import get_auth_service

router = APIRouter(prefix="/auth", tags=["auth"])

def _require_credentials(credentials: Credentials):
    if not credentials.username or not credentials.password:
        raise HTTPException(status_code=400, detail="Username and password are required")

@router.post("/register", response_model=AuthResponse, status_code=201)
async def register_user(credentials: Credentials, auth_service: AuthService = Depends(get_auth_service)):
    """Register a new user"""
    _require_credentials(credentials)

    try:
        result = await auth_service.register(credentials.username, credentials.password)
    except UsernameTakenError:
        raise HTTPException(status_code=400, detail="Username already exists")
    except Exception as e:
        print(f"❌ Error registering user: {e}")
        traceback.print_exc()
        raise HTTPException(status_code=500, detail="Internal server error")

    return AuthResponse(token=result.token, user_id=result.user_id, username=result.username)

@router.post("/login", response_model=AuthResponse)
async def login_user(credentials: Credentials, auth_service: AuthService = Depends(get_auth_service)):
    """Login user"""
    _require_credentials(credentials)

    try:
        result = await auth_service.login(credentials.username, credentials.password)
    except InvalidCredentialsError:
        raise HTTPException(status_code=401, detail="Invalid credentials")
    except Exception as e:
        print(f"❌ Error during login: {e}")
        traceback.print_exc()
        raise HTTPException(status_code=500, detail="Internal server error")

    return AuthResponse(token=result.token, user_id=result.user_id, username=result.username)
