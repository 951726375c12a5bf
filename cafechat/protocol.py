"""Wire messages exchanged with the chat server and the user list model."""

from __future__ import annotations

import json
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from typing import Any

AVATAR_BASE = "https://api.dicebear.com/9.x/pixel-art/svg?seed="

PALETTE = (
    "#fce4ec",
    "#e3f2fd",
    "#f3e5f5",
    "#e8f5e9",
    "#fff8e1",
    "#fbe9e7",
    "#ede7f6",
    "#e0f7fa",
    "#f9fbe7",
    "#f1f8e9",
)


class MsgType(str, Enum):
    """Kind of a message on the chat socket."""

    USERS = "users"
    REGISTER = "register"
    MESSAGE = "message"


@dataclass
class WebSocketMessage:
    """A message as sent over the chat socket."""

    message_type: MsgType
    data_array: list[str] | None = None
    data: str | None = None

    def to_json(self) -> str:
        """Serialise to the compact JSON form the server expects."""
        payload = {
            "messageType": self.message_type.value,
            "dataArray": None if self.data_array is None else list(self.data_array),
            "data": self.data,
        }
        return json.dumps(payload, separators=(",", ":"), ensure_ascii=False)


@dataclass(frozen=True)
class MessageData:
    """A chat line: who sent it and what it says."""

    sender: str
    message: str


@dataclass(frozen=True)
class UserProfile:
    """A user shown in the side bar."""

    name: str
    avatar: str
    color: str


def _load_object(text: str, what: str) -> dict[str, Any]:
    try:
        value = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ValueError(f"invalid {what}: {exc}") from exc
    if not isinstance(value, dict):
        raise ValueError(f"invalid {what}: expected a JSON object")
    return value


def _optional_str(obj: dict[str, Any], key: str) -> str | None:
    value = obj.get(key)
    if value is None or isinstance(value, str):
        return value
    raise ValueError(f"field {key!r} must be a string or null")


def _required_str(obj: dict[str, Any], key: str) -> str:
    if key not in obj:
        raise ValueError(f"missing field {key!r}")
    value = obj[key]
    if not isinstance(value, str):
        raise ValueError(f"field {key!r} must be a string")
    return value


def parse_message(text: str) -> WebSocketMessage:
    """Parse a socket message; raise ValueError if it is malformed."""
    obj = _load_object(text, "socket message")
    kind = _required_str(obj, "messageType")
    try:
        message_type = MsgType(kind)
    except ValueError as exc:
        raise ValueError(f"unknown message type {kind!r}") from exc

    data_array = obj.get("dataArray")
    if data_array is not None:
        if not isinstance(data_array, list) or not all(
            isinstance(item, str) for item in data_array
        ):
            raise ValueError("field 'dataArray' must be a list of strings or null")

    return WebSocketMessage(
        message_type=message_type,
        data_array=data_array,
        data=_optional_str(obj, "data"),
    )


def parse_message_data(raw: str) -> MessageData:
    """Parse the payload of a chat message; raise ValueError if malformed."""
    obj = _load_object(raw, "message data")
    return MessageData(
        sender=_required_str(obj, "from"),
        message=_required_str(obj, "message"),
    )


def avatar_url(seed: str) -> str:
    """Return the avatar image address for a seed."""
    return f"{AVATAR_BASE}{seed}"


def parse_users(usernames: Iterable[str] | None) -> list[UserProfile]:
    """Build user profiles, colouring them in turn from the palette."""
    return [
        UserProfile(name=name, avatar=avatar_url(name), color=PALETTE[i % len(PALETTE)])
        for i, name in enumerate(usernames or ())
    ]