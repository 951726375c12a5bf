"""Application routes, the shared user and the command-line client."""

from __future__ import annotations

import argparse
import asyncio
import sys
import threading
from dataclasses import dataclass
from enum import Enum
from urllib.parse import urlsplit

from .chat import Chat
from .event_bus import EventBus
from .login import Login
from .websocket import DEFAULT_URL, WebsocketService


class Route(str, Enum):
    """Pages of the application and their paths."""

    LOGIN = "/"
    CHAT = "/chat"
    NOT_FOUND = "/404"


@dataclass
class User:
    """The user shared between the login form and the chat room."""

    username: str = "initial"


class _NotFound:
    def render(self) -> str:
        return "<h1>404 baby</h1>"


def recognize(path: str) -> Route:
    """Map a path to its route; unknown paths give NOT_FOUND."""
    clean = urlsplit(path).path or "/"
    try:
        return Route(clean)
    except ValueError:
        return Route.NOT_FOUND


def switch(route: Route, user: User, service):
    """Build the page for a route."""
    if route is Route.LOGIN:
        return Login(user)
    if route is Route.CHAT:
        return Chat(user, service)
    return _NotFound()


class _Printer:
    """Print users and messages as the chat picks them up."""

    def __init__(self, chat: Chat, out) -> None:
        self._chat = chat
        self._out = out
        self._shown = 0
        self._names: list[str] = []

    def __call__(self, _text: str) -> None:
        names = [user.name for user in self._chat.users]
        if names != self._names:
            self._names = names
            print("Users: " + ", ".join(names), file=self._out, flush=True)
        for message in self._chat.messages[self._shown:]:
            print(f"{message.sender}: {message.message}", file=self._out, flush=True)
        self._shown = len(self._chat.messages)


def _pump_stdin(loop: asyncio.AbstractEventLoop, lines: asyncio.Queue) -> None:
    try:
        for line in sys.stdin:
            loop.call_soon_threadsafe(lines.put_nowait, line)
        loop.call_soon_threadsafe(lines.put_nowait, None)
    except RuntimeError:
        pass


async def _session(user: User, url: str) -> None:
    bus = EventBus()
    service = WebsocketService(bus, url)
    chat = switch(Route.CHAT, user, service)
    bus.connect(_Printer(chat, sys.stdout))
    runner = asyncio.create_task(service.run())

    lines: asyncio.Queue = asyncio.Queue()
    loop = asyncio.get_running_loop()
    threading.Thread(target=_pump_stdin, args=(loop, lines), daemon=True).start()

    while not runner.done():
        getter = asyncio.create_task(lines.get())
        done, _ = await asyncio.wait({runner, getter}, return_when=asyncio.FIRST_COMPLETED)
        if getter not in done:
            getter.cancel()
            break
        line = getter.result()
        if line is None:
            break
        chat.submit(line)

    service.close()
    await runner


def main(argv=None) -> int:
    """Log in with a user name and chat from the terminal."""
    parser = argparse.ArgumentParser(prog="cafechat", description="Terminal chat client.")
    parser.add_argument("--url", default=DEFAULT_URL, help="chat server address")
    parser.add_argument("--username", help="name to chat as")
    args = parser.parse_args(argv)

    user = User()
    login = Login(user)
    name = args.username if args.username is not None else input("Username: ")
    login.set_input(name.strip())
    if not login.submit():
        print("a user name is required", file=sys.stderr)
        return 1

    try:
        asyncio.run(_session(user, args.url))
    except OSError as exc:
        print(f"connection failed: {exc}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        return 130
    return 0