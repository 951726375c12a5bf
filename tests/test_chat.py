import asyncio

import pytest

from cafechat.app import User
from cafechat.chat import UNKNOWN_AVATAR, Chat
from cafechat.event_bus import EventBus
from cafechat.protocol import (
    MessageData,
    MsgType,
    WebSocketMessage,
    parse_message,
    parse_users,
)


class FakeService:
    def __init__(self, error=None):
        self.event_bus = EventBus()
        self.sent = []
        self.error = error

    def send(self, text):
        if self.error is not None:
            raise self.error
        self.sent.append(text)


def chat_message(sender, text):
    payload = MessageData(sender=sender, message=text)
    data = '{"from":%s,"message":%s}' % (
        WebSocketMessage(MsgType.MESSAGE, data=payload.sender).to_json().split('"data":')[1][:-1],
        WebSocketMessage(MsgType.MESSAGE, data=payload.message).to_json().split('"data":')[1][:-1],
    )
    return WebSocketMessage(MsgType.MESSAGE, data=data).to_json()


def users_message(names):
    return WebSocketMessage(MsgType.USERS, data_array=list(names)).to_json()


@pytest.fixture
def service():
    return FakeService()


@pytest.fixture
def chat(service):
    return Chat(User(username="alice"), service)


def test_registers_on_creation(service, chat):
    assert len(service.sent) == 1
    sent = parse_message(service.sent[0])
    assert sent.message_type is MsgType.REGISTER
    assert sent.data == "alice"
    assert sent.data_array is None


def test_users_message_updates_list(chat):
    assert chat.handle_message(users_message(["alice", "bob"])) is True
    assert chat.users == parse_users(["alice", "bob"])


def test_chat_message_appended(chat):
    assert chat.handle_message(chat_message("bob", "hello")) is True
    assert chat.messages == [MessageData(sender="bob", message="hello")]


@pytest.mark.parametrize(
    "text",
    [
        "not json",
        WebSocketMessage(MsgType.REGISTER, data="bob").to_json(),
        WebSocketMessage(MsgType.MESSAGE, data=None).to_json(),
        WebSocketMessage(MsgType.MESSAGE, data="not json").to_json(),
    ],
)
def test_ignored_messages(chat, text):
    assert chat.handle_message(text) is False
    assert chat.messages == []
    assert chat.users == []


def test_bus_delivers_to_chat(service, chat):
    service.event_bus.send(chat_message("bob", "via bus"))
    assert [m.message for m in chat.messages] == ["via bus"]


def test_submit_trims_and_sends(service, chat):
    assert chat.submit("  hi there \n") is True
    sent = parse_message(service.sent[-1])
    assert sent.message_type is MsgType.MESSAGE
    assert sent.data == "hi there"


@pytest.mark.parametrize("text", ["", "   ", "\n\t"])
def test_submit_blank_not_sent(service, chat, text):
    assert chat.submit(text) is False
    assert len(service.sent) == 1


@pytest.mark.parametrize("error", [ConnectionError("closed"), asyncio.QueueFull()])
def test_send_failures_are_dropped(error):
    failing = FakeService(error=error)
    chat = Chat(User(username="alice"), failing)
    assert chat.submit("hello") is True
    assert failing.sent == []


def test_render_lists_users_and_messages(chat):
    chat.handle_message(users_message(["bob"]))
    chat.handle_message(chat_message("bob", "hello <you>"))
    page = chat.render()
    assert "UwU Cafee Chat" in page
    assert "#fce4ec" in page
    assert parse_users(["bob"])[0].avatar in page
    assert "hello &lt;you&gt;" in page
    assert "<you>" not in page


def test_render_gif_and_unknown_sender(chat):
    chat.handle_message(chat_message("ghost", "funny.gif"))
    page = chat.render()
    assert '<img class="gif" src="funny.gif"/>' in page
    assert "#ffffff" in page
    assert UNKNOWN_AVATAR in page