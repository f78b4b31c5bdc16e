# designer/chat.py
# Conversation flow: the brief screen before the first send, the viewer after it.

import logging
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from designer.gemini_handler import ChatMessage

logger = logging.getLogger(__name__)

QUICK_PROMPTS: List[Tuple[str, str]] = [
    ("🛋️ Luxury bedroom",
     "Design a luxury bedroom with a deep navy accent wall, warm wood floor and gold details. Show it in 3D."),
    ("💰 Budget living room",
     "Show me a budget-friendly living room in 3D with a cozy rug and soft neutral colors, plus a budget breakdown for $2000."),
    ("⚪ Minimalist studio",
     "Create a minimalist studio in 3D with white walls, light oak floor and only essential furniture."),
    ("🎨 Color palette",
     "Suggest a calming Scandinavian color palette for a bedroom."),
    ("🪑 Furniture picks",
     "Recommend furniture for a modern living room with prices and stores."),
    ("⚖️ Compare styles",
     "Compare luxury, budget and minimalist designs for my bedroom."),
    ("📱 AR preview",
     "Place a sofa, a coffee table and a floor lamp in an AR room preview."),
]


class FlowState(str, Enum):
    BRIEF = "brief"
    VIEWING = "viewing"


class ConversationFlow:
    """Two states, one irreversible transition on the first accepted message."""

    def __init__(self, thread):
        self.thread = thread
        self.state = FlowState.BRIEF

    @property
    def is_brief(self) -> bool:
        return self.state is FlowState.BRIEF

    def submit(self, text) -> bool:
        if not text or not text.strip():
            return False
        if self.state is FlowState.BRIEF:
            logger.info("Leaving the brief screen")
        self.state = FlowState.VIEWING
        self.thread.send_message(text)
        return True


def latest_renderable_message(messages: Sequence[ChatMessage]) -> Optional[ChatMessage]:
    for message in reversed(messages):
        if message.is_renderable:
            return message
    return None
