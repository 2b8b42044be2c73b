# services/auth_service.py
import asyncio
import bcrypt
from dataclasses import dataclass

from models.chat import User
from services.store import ChatStore, UsernameTakenError
from services.token_service import TokenService

BCRYPT_ROUNDS = 10
# bcrypt only uses the first 72 bytes of a password
BCRYPT_MAX_BYTES = 72


class InvalidCredentialsError(Exception):
    """Unknown username or wrong password"""


def _password_bytes(password: str) -> bytes:
    return password.encode('utf-8')[:BCRYPT_MAX_BYTES]


def hash_password(password: str) -> str:
    """Hash password with bcrypt"""
    salt = bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
    return bcrypt.hashpw(_password_bytes(password), salt).decode('utf-8')


def verify_password(password: str, hashed_password: str) -> bool:
    """Verify password against hash"""
    return bcrypt.checkpw(_password_bytes(password), hashed_password.encode('utf-8'))


@dataclass
class AuthResult:
    token: str
    user_id: str
    username: str


class AuthService:
    def __init__(self, store: ChatStore, token_service: TokenService):
        self.store = store
        self.token_service = token_service

    async def register(self, username: str, password: str) -> AuthResult:
        """Create a user and hand back a fresh session token"""
        print(f"🔍 Registering user: {username}")

        if await self.store.user_exists(username):
            raise UsernameTakenError(username)

        password_hash = await asyncio.to_thread(hash_password, password)
        user = await self.store.create_user(User(username=username, password_hash=password_hash))

        print(f"✅ User registered: {user.id}")
        return self._session_for(user)

    async def login(self, username: str, password: str) -> AuthResult:
        print(f"🔍 Login attempt for: {username}")

        user = await self.store.get_user_by_username(username)
        if not user:
            raise InvalidCredentialsError()

        if not await asyncio.to_thread(verify_password, password, user.password_hash):
            raise InvalidCredentialsError()

        return self._session_for(user)

    def _session_for(self, user: User) -> AuthResult:
        token = self.token_service.issue(user.id, user.username)
        return AuthResult(token=token, user_id=user.id, username=user.username)
