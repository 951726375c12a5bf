"""The login form: pick a user name before entering the chat."""

from __future__ import annotations

from html import escape


class Login:
    """Holds the typed user name and commits it to the shared user."""

    def __init__(self, user) -> None:
        self.user = user
        self.username = ""

    @property
    def disabled(self) -> bool:
        """Whether the submit button is disabled."""
        return len(self.username) < 1

    def set_input(self, value: str) -> None:
        """Record the current content of the name field."""
        self.username = value

    def submit(self) -> bool:
        """Store the typed name on the user; return False while disabled."""
        if self.disabled:
            return False
        self.user.username = self.username
        return True

    def render(self) -> str:
        """Return the form as HTML."""
        disabled = " disabled" if self.disabled else ""
        return (
            '<div class="login"><form>'
            f'<input placeholder="Username" value="{escape(self.username)}"/>'
            f'<a href="/chat"><button{disabled}>Go Chatting!</button></a>'
            "</form></div>"
        )