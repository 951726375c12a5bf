"""The chat room: user list, message history and the message input."""

from __future__ import annotations

import asyncio
from contextlib import suppress
from html import escape

from .protocol import (
    MessageData,
    MsgType,
    UserProfile,
    WebSocketMessage,
    avatar_url,
    parse_message,
    parse_message_data,
    parse_users,
)

UNKNOWN_AVATAR = avatar_url("unknown")
UNKNOWN_COLOR = "#ffffff"
TITLE = "UwU Cafee Chat"


class Chat:
    """Chat room state fed by socket messages arriving on the event bus."""

    def __init__(self, user, service) -> None:
        self.users: list[UserProfile] = []
        self.messages: list[MessageData] = []
        self._service = service
        self._send(WebSocketMessage(message_type=MsgType.REGISTER, data=user.username))
        self._handler_id = service.event_bus.connect(self.handle_message)

    def _send(self, message: WebSocketMessage) -> None:
        # A full or closed channel drops the message, as a failed try-send would.
        with suppress(asyncio.QueueFull, ConnectionError):
            self._service.send(message.to_json())

    def handle_message(self, text: str) -> bool:
        """Apply a socket message; return True if the view changed."""
        try:
            message = parse_message(text)
        except ValueError:
            return False

        if message.message_type is MsgType.USERS:
            self.users = parse_users(message.data_array)
            return True
        if message.message_type is MsgType.MESSAGE:
            if message.data is None:
                return False
            try:
                self.messages.append(parse_message_data(message.data))
            except ValueError:
                return False
            return True
        return False

    def submit(self, text: str) -> bool:
        """Send the trimmed text as a chat message; return True if it was sent."""
        text = text.strip()
        if not text:
            return False
        self._send(WebSocketMessage(message_type=MsgType.MESSAGE, data=text))
        return True

    def _profile_for(self, name: str) -> tuple[str, str]:
        for user in self.users:
            if user.name == name:
                return user.avatar, user.color
        return UNKNOWN_AVATAR, UNKNOWN_COLOR

    def _render_user(self, user: UserProfile) -> str:
        return (
            f'<div class="user" style="background-color:{escape(user.color)}">'
            f'<img class="avatar" src="{escape(user.avatar)}" alt="avatar"/>'
            f'<div class="name">{escape(user.name)}</div>'
            '<div class="status">Hi there!</div>'
            "</div>"
        )

    def _render_message(self, message: MessageData) -> str:
        avatar, color = self._profile_for(message.sender)
        if message.message.endswith(".gif"):
            body = f'<img class="gif" src="{escape(message.message)}"/>'
        else:
            body = f"<span>{escape(message.message)}</span>"
        color = escape(color)
        return (
            f'<div class="message" style="background-color:{color}; border-color:{color}">'
            f'<img class="avatar" src="{escape(avatar)}" alt="avatar"/>'
            f'<div class="from">{escape(message.sender)}</div>'
            f'<div class="text">{body}</div>'
            "</div>"
        )

    def render(self) -> str:
        """Return the room as HTML."""
        users = "".join(self._render_user(user) for user in self.users)
        messages = "".join(self._render_message(message) for message in self.messages)
        return (
            '<div class="chat">'
            f'<div class="users"><div class="heading">Users</div>{users}</div>'
            '<div class="room">'
            f'<div class="heading">{TITLE}</div>'
            f'<div class="messages">{messages}</div>'
            '<div class="input">'
            '<input type="text" placeholder="Message" name="message" required/>'
            '<button type="submit">Send</button>'
            "</div></div></div>"
        )