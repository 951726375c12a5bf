# cafechat

cafechat is a small chat client for a WebSocket chat server. You give it a
username and it registers that name with the server. It then prints who is
online and the messages that arrive, and it sends each line you type as a chat
message.

## Installation

```
pip install .
```

To also install what the tests need:

```
pip install ".[test]"
```

## Usage

```
cafechat [--url URL] [--username NAME]
```

- `--url` sets the chat server address. The default is `ws://127.0.0.1:8080`.
- `--username` sets the name to chat as. If you leave it out, the client asks
  for one with a `Username:` prompt.

Surrounding whitespace is stripped from the name. An empty name prints
`a user name is required` and the command exits with status 1.

After connecting, the client sends a `register` message that carries your
name. From then on:

- When the user list changes it prints a line `Users: name1, name2, ...`.
- Each incoming chat message is printed as `sender: text`.
- Each line read from standard input is stripped and, unless it is empty, sent
  as a `message`.

The session ends when standard input reaches end of file or when the server
closes the connection. If the connection cannot be opened, the client prints
`connection failed: ...` and exits with status 1. Ctrl-C exits with status 130.

## Modules

- `cafechat.protocol` covers the JSON messages exchanged with the server.
  - `WebSocketMessage` has a `message_type` (`MsgType.USERS`, `REGISTER` or
    `MESSAGE`), an optional `data` string and an optional `data_array` list.
    `to_json()` writes it as compact JSON with the keys `messageType`,
    `dataArray` and `data`.
  - `parse_message(text)` decodes incoming text. It raises `ValueError` when
    the text is malformed or the type is unknown.
  - `parse_message_data(raw)` decodes a chat payload with `from` and
    `message` fields into a `MessageData(sender, message)`.
  - `parse_users(usernames)` turns usernames into `UserProfile` entries. Each
    entry gets an avatar address from `avatar_url(name)` and a colour from a
    fixed ten-colour palette, assigned in turn.
- `cafechat.event_bus.EventBus` forwards each `send(message)` to every handler
  added with `connect(handler)`. `connect` returns an id, and
  `disconnect(handler_id)` removes that handler.
- `cafechat.websocket.WebsocketService(event_bus, url)` manages the connection.
  - `send(text)` queues text for the server without waiting. It raises
    `asyncio.QueueFull` when 1000 items are already waiting, and
    `ConnectionError` after `close()` has been called.
  - `run()` connects, writes the queued text, and publishes incoming frames
    onto the bus. Text frames are always published. Binary frames are
    published only when they are valid UTF-8.
  - `close()` lets the queue drain and then closes the connection.
- `cafechat.chat.Chat(user, service)` registers the user, then subscribes to
  the service's bus.
  - `handle_message(text)` updates `users` and `messages`. It returns whether
    anything changed.
  - `submit(text)` sends trimmed, non-empty text.
  - `render()` returns the room as an HTML string. A message ending in `.gif`
    is rendered as an `<img>`. Messages from senders not in the user list get a
    white background and a generic avatar.
- `cafechat.login.Login(user)` holds the typed name.
  - `set_input(value)` records the name.
  - `submit()` copies the name onto the user. It returns `False`, and changes
    nothing, while the name is empty.
  - `render()` returns the form as HTML.
- `cafechat.app` provides the rest.
  - `Route` lists the paths `/`, `/chat` and `/404`.
  - `recognize(path)` maps any other path to `Route.NOT_FOUND`.
  - `switch(route, user, service)` builds the page for a route.
  - `User` holds the shared username.
  - `main(argv=None)` is the `cafechat` command.

## Limitations

- There is no chat server here. The client needs one running at the given
  address.
- Nothing serves or displays the HTML that `render()` produces. The `cafechat`
  command shows the chat as plain text lines in the terminal.

## Tests

```
pytest
```