# services/response_service.py
import random
from typing import Optional

BOT_RESPONSES = (
    "I'm a demo chatbot. In a real implementation, I'd connect to an LLM API.",
    "Thanks for your message! This is a simulated response.",
    "Interesting point! Normally I'd analyze this with AI.",
    "I'm just a demo, but I'd be smarter with a real AI backend.",
    "This is a placeholder response. A real chatbot would be more helpful!",
)


def pick_bot_response(rng: Optional[random.Random] = None) -> str:
    """
    Stub responder: returns one of BOT_RESPONSES uniformly at random.

    The user's message is not looked at. This is where a content-aware
    responder (e.g. an LLM call) would go.
    """
    return (rng or random).choice(BOT_RESPONSES)
