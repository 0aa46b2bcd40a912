import asyncio
import json

import pytest

from apps.board.gateway import BoardGatewayDirectory, board_gateways


class FakeConnection:
    """Transporte falso: guarda o que recebeu e pode falhar ou atrasar"""

    def __init__(self, name="fake", fail=False, delay=None):
        self.name = name
        self.fail = fail
        self.delay = delay
        self.attempts = 0
        self.sent = []
        self.closed = False

    async def send(self, text_data=None, bytes_data=None, close=False):
        self.attempts += 1
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.fail:
            raise ConnectionResetError(f"{self.name}: socket fechado")
        self.sent.append(json.loads(text_data))

    async def close(self, code=None):
        self.closed = True

    def __repr__(self):
        return f"<FakeConnection {self.name}>"


@pytest.fixture
def make_connection():
    return FakeConnection


@pytest.fixture
def directory():
    return BoardGatewayDirectory()


@pytest.fixture(autouse=True)
def _clean_board_gateways():
    board_gateways.clear()
    yield
    board_gateways.clear()
