import itertools

import pytest

from helpers import FakeChannel, frame
from room import Room
from session_router import SessionRouter


@pytest.fixture
def room():
    return Room()


@pytest.fixture
def router(room):
    ids = (f"c{n}" for n in itertools.count(1))
    return SessionRouter(room, id_factory=lambda: next(ids))


@pytest.fixture
def connect(router):
    def _connect(name: str = "peer"):
        channel = FakeChannel(name)
        return router.connect(channel), channel

    return _connect


@pytest.fixture
def host(router, connect):
    peer, channel = connect("host")
    router.handle_frame(peer, frame("register-host"))
    channel.pop()
    return peer, channel


@pytest.fixture
def add_client(router, connect):
    def _add(name: str = "client"):
        peer, channel = connect(name)
        router.handle_frame(peer, frame("client-hello"))
        channel.pop()
        return peer, channel

    return _add
