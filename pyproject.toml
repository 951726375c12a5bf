[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cafechat"
version = "0.1.0"
description = "A small terminal chat client for a WebSocket chat server"
requires-python = ">=3.10"
keywords = ["chat", "websocket", "client", "asyncio", "terminal"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Framework :: AsyncIO",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Communications :: Chat",
]
dependencies = [
    "websockets",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
]

[project.scripts]
cafechat = "cafechat.app:main"

[tool.hatch.build.targets.wheel]
packages = ["cafechat"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
