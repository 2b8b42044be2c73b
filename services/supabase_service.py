# services/supabase_service.py
from supabase import create_client, Client, ClientOptions
from postgrest.exceptions import APIError
import asyncio
from typing import Dict, List, Optional, Any
from datetime import datetime, timezone

from models.chat import ChatMessage, User
from services.store import ChatStore, UsernameTakenError

# Postgres unique_violation
UNIQUE_VIOLATION = "23505"

class SupabaseService(ChatStore):
    def __init__(
        self,
        url: Optional[str] = None,
        key: Optional[str] = None,
        client: Optional[Client] = None,
        timeout: Optional[float] = None,
    ):
        if client is None:
            if not url or not key:
                raise ValueError("SUPABASE_URL and SUPABASE_SERVICE_KEY must be set in environment variables")
            # Each blocking request gives up after 'timeout' seconds
            options = ClientOptions(postgrest_client_timeout=timeout) if timeout else None
            client = create_client(url, key, options=options)

        self.client: Client = client
        print("✅ Supabase client initialized")

    async def _execute(self, query):
        # supabase-py is blocking; keep it off the event loop
        return await asyncio.to_thread(query.execute)

    # User Management Operations
    async def user_exists(self, username: str) -> bool:
        """Check whether a username is already registered"""
        response = await self._execute(
            self.client.table('users')
                .select('id')
                .eq('username', username)
                .limit(1)
        )
        return bool(response.data)

    async def get_user_by_username(self, username: str) -> Optional[User]:
        """Get user by username"""
        print(f"🔍 Getting user by username: {username}")

        response = await self._execute(
            self.client.table('users').select('*').eq('username', username).limit(1)
        )

        if response.data:
            return self._row_to_user(response.data[0])
        print(f"❌ User not found by username: {username}")
        return None

    async def create_user(self, user: User) -> User:
        """Create a new user in the database"""
        print(f"🔍 Creating user in Supabase: {user.username}")

        user_data = {
            'id': user.id,
            'username': user.username,
            'password_hash': user.password_hash,
            'created_at': user.created_at.isoformat()
        }

        try:
            response = await self._execute(self.client.table('users').insert(user_data))
        except APIError as e:
            if e.code == UNIQUE_VIOLATION:
                raise UsernameTakenError(user.username) from e
            raise

        if not response.data:
            raise Exception("No data returned from Supabase")

        print(f"✅ User created successfully: {response.data[0]['id']}")
        return self._row_to_user(response.data[0])

    # Chat Operations
    async def create_chat_message(self, message: ChatMessage) -> ChatMessage:
        """Save a chat message"""
        message_data = {
            'id': message.id,
            'user_id': message.user_id,
            'message': message.message,
            'is_user': message.is_user_message,
            'created_at': message.created_at.isoformat()
        }

        response = await self._execute(self.client.table('chat_messages').insert(message_data))

        if not response.data:
            raise Exception("No data returned from Supabase")
        return self._row_to_message(response.data[0])

    async def get_chat_messages(self, user_id: str) -> List[ChatMessage]:
        """Get chat messages for a user, oldest first"""
        response = await self._execute(
            self.client.table('chat_messages')
                .select('*')
                .eq('user_id', user_id)
                .order('created_at', desc=False)
        )
        return [self._row_to_message(row) for row in response.data or []]

    # Health check method
    async def health_check(self) -> Dict[str, Any]:
        """Check if Supabase connection is working"""
        try:
            # Simple query to test connection
            await self._execute(self.client.table('users').select('id').limit(1))

            return {
                "status": "healthy",
                "message": "Supabase connection working",
                "timestamp": datetime.now(timezone.utc).isoformat()
            }

        except Exception as e:
            return {
                "status": "unhealthy",
                "message": f"Supabase connection failed: {str(e)}",
                "timestamp": datetime.now(timezone.utc).isoformat()
            }

    @staticmethod
    def _row_to_user(row: Dict[str, Any]) -> User:
        return User(
            id=row['id'],
            username=row['username'],
            password_hash=row['password_hash'],
            created_at=row['created_at']
        )

    @staticmethod
    def _row_to_message(row: Dict[str, Any]) -> ChatMessage:
        return ChatMessage(
            id=row['id'],
            user_id=row['user_id'],
            message=row['message'],
            is_user_message=row['is_user'],
            created_at=row['created_at']
        )
