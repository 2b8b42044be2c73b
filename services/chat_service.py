# services/chat_service.py
from typing import Callable, List

from models.chat import ChatMessage
from services.response_service import pick_bot_response
from services.store import ChatStore


class ChatService:
    def __init__(self, store: ChatStore, responder: Callable[[], str] = pick_bot_response):
        self.store = store
        self.responder = responder

    async def handle_turn(self, user_id: str, message: str) -> str:
        """
        Persist the user's message, pick a reply and persist that too.

        The two writes are sequential and not wrapped in a transaction; if the
        second one fails the user message stays without a reply.
        """
        await self.store.create_chat_message(
            ChatMessage(user_id=user_id, message=message, is_user_message=True)
        )

        bot_response = self.responder()

        await self.store.create_chat_message(
            ChatMessage(user_id=user_id, message=bot_response, is_user_message=False)
        )
        return bot_response

    async def get_history(self, user_id: str) -> List[ChatMessage]:
        return await self.store.get_chat_messages(user_id)
