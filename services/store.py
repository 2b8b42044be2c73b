"""
Storage interface for users and chat history.

'ChatStore' is the pluggable persistence backend shared by the auth and chat
services. 'SupabaseService' is the production implementation; 'InMemoryStore'
keeps everything in process memory for local development and tests. The
backend is picked from configuration at startup, there is no fallback from one
to the other.
"""

# services/store.py
import asyncio
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from models.chat import ChatMessage, User


class StoreError(Exception):
    """Raised when the store cannot complete an operation"""


class UsernameTakenError(StoreError):
    """Raised when a user is created with a username that already exists"""


class ChatStore(ABC):
    """Abstract repository for 'User' and 'ChatMessage' records."""

    @abstractmethod
    async def user_exists(self, username: str) -> bool:
        pass

    @abstractmethod
    async def get_user_by_username(self, username: str) -> Optional[User]:
        pass

    @abstractmethod
    async def create_user(self, user: User) -> User:
        """Insert a user. Raise 'UsernameTakenError' on a duplicate username."""
        pass

    @abstractmethod
    async def create_chat_message(self, message: ChatMessage) -> ChatMessage:
        pass

    @abstractmethod
    async def get_chat_messages(self, user_id: str) -> List[ChatMessage]:
        """All messages owned by 'user_id', oldest first."""
        pass

    @abstractmethod
    async def health_check(self) -> Dict[str, Any]:
        """Return {"status": "healthy" | "unhealthy", "message": ...}. Never raises."""
        pass


def build_store(config) -> ChatStore:
    """Create the store selected by STORE_BACKEND"""
    if config.STORE_BACKEND == "memory":
        from services.memory_store import InMemoryStore
        return InMemoryStore()

    if config.STORE_BACKEND == "supabase":
        from services.supabase_service import SupabaseService
        return SupabaseService(config.SUPABASE_URL, config.SUPABASE_SERVICE_KEY, timeout=config.DB_CONNECT_TIMEOUT)

    raise ValueError(f"Unknown STORE_BACKEND: {config.STORE_BACKEND}")


async def connect_store(store: ChatStore, timeout: float) -> ChatStore:
    """Make sure the store answers within 'timeout' seconds, raise RuntimeError otherwise"""
    try:
        health = await asyncio.wait_for(store.health_check(), timeout=timeout)
    except asyncio.TimeoutError:
        raise RuntimeError(f"Database did not respond within {timeout}s")

    if health.get("status") != "healthy":
        raise RuntimeError(f"Database connection failed: {health.get('message')}")

    return store
