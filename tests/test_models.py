import dataclasses

import pytest

from musebot.models import ChatSession, Message, RequestState, Role


def test_new_session_is_idle_and_empty():
    session = ChatSession()
    assert session.state is RequestState.IDLE
    assert session.is_empty
    assert not session.is_pending


def test_append_keeps_order():
    session = ChatSession()
    session.append(Role.USER, "first")
    session.append(Role.ASSISTANT, "second")
    assert [m.content for m in session.messages] == ["first", "second"]
    assert [m.role for m in session.messages] == [Role.USER, Role.ASSISTANT]


def test_message_is_immutable():
    message = Message(Role.USER, "hi")
    with pytest.raises(dataclasses.FrozenInstanceError):
        message.content = "changed"


def test_message_as_dict():
    assert Message(Role.ASSISTANT, "ok").as_dict() == {"role": "assistant", "content": "ok"}
