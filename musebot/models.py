# models.py
from dataclasses import dataclass, field
from enum import Enum
from typing import List


class Role(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"


class RequestState(str, Enum):
    IDLE = "idle"
    PENDING = "pending"


@dataclass(frozen=True)
class Message:
    role: Role
    content: str

    def as_dict(self) -> dict:
        return {"role": self.role.value, "content": self.content}


@dataclass
class ChatSession:
    """
    Transcript and request state for one browser session.

    The transcript only ever grows. Nothing here is persisted; the session
    lives as long as the Streamlit session that holds it.
    """
    transcript: List[Message] = field(default_factory=list)
    state: RequestState = RequestState.IDLE

    @property
    def messages(self) -> tuple:
        return tuple(self.transcript)

    @property
    def is_pending(self) -> bool:
        return self.state is RequestState.PENDING

    @property
    def is_empty(self) -> bool:
        return not self.transcript

    def append(self, role: Role, content: str) -> None:
        self.transcript.append(Message(role=role, content=content))
