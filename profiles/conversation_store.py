"""
Short-term dialogue context for the chat front end.

Keeps a capped sequence of recent turns per chat; the oldest turns are
evicted once the cap is reached. Context lives in process memory only.
"""

from collections import OrderedDict, deque
from typing import Literal

from pydantic import BaseModel

MAX_TURNS_PER_CHAT = 10


class ConversationTurn(BaseModel):
    """One message in a chat."""

    role: Literal["user", "assistant"]
    content: str


class ConversationStore:
    """Recent turns keyed by channel-native chat id"""

    def __init__(self, max_turns: int = MAX_TURNS_PER_CHAT, max_chats: int | None = None):
        self.max_turns = max_turns
        self.max_chats = max_chats
        self._chats: OrderedDict[str, deque[ConversationTurn]] = OrderedDict()

    def append(self, chat_id: str, role: Literal["user", "assistant"], content: str) -> None:
        """Record a turn, evicting the oldest turn (and least recent chat) past the caps."""
        turn = ConversationTurn(role=role, content=content)

        turns = self._chats.get(chat_id)
        if turns is None:
            turns = deque(maxlen=self.max_turns)
            self._chats[chat_id] = turns

        turns.append(turn)
        self._chats.move_to_end(chat_id)

        if self.max_chats is not None:
            while len(self._chats) > self.max_chats:
                self._chats.popitem(last=False)

    def history(self, chat_id: str) -> list[ConversationTurn]:
        """Turns for a chat, oldest first."""
        return list(self._chats.get(chat_id, ()))

    def clear(self, chat_id: str) -> None:
        self._chats.pop(chat_id, None)

    def __len__(self) -> int:
        return len(self._chats)
