import json

import httpx
import pytest

from apps.board.client import RelayClient
from apps.board.events import TaskUpdated


def build_client(handler, **kwargs):
    return RelayClient(transport=httpx.MockTransport(handler), **kwargs)


class TestRelayClient:
    def test_broadcast_posts_event_to_default_board(self):
        requests = []

        def handler(request):
            requests.append(request)
            return httpx.Response(200, json={"success": True})

        client = build_client(handler)

        assert client.broadcast(TaskUpdated(task_id="abc", changes={"status": "done"})) is True
        assert str(requests[0].url) == "http://relay.testserver/broadcast"
        assert requests[0].method == "POST"
        assert json.loads(requests[0].content) == {
            "type": "task_updated",
            "taskId": "abc",
            "changes": {"status": "done"},
        }

    def test_broadcast_to_named_board(self):
        urls = []

        def handler(request):
            urls.append(str(request.url))
            return httpx.Response(200, json={"success": True})

        client = build_client(handler, base_url="http://relay.local/")

        assert client.broadcast({"type": "task_deleted", "taskId": "abc"}, board="ops") is True
        assert urls == ["http://relay.local/boards/ops/broadcast"]

    def test_connection_error_returns_false(self):
        def handler(request):
            raise httpx.ConnectError("recusado", request=request)

        assert build_client(handler).broadcast({"type": "task_deleted", "taskId": "abc"}) is False

    @pytest.mark.parametrize("response", [
        httpx.Response(500, text="erro"),
        httpx.Response(400, json={"success": False, "error": "Payload deve ser um objeto JSON"}),
        httpx.Response(200, text="não é json"),
        httpx.Response(200, json={"success": False}),
    ])
    def test_unconfirmed_broadcast_returns_false(self, response):
        client = build_client(lambda request: response)

        assert client.broadcast({"type": "task_deleted", "taskId": "abc"}) is False

    def test_missing_url_raises(self, settings):
        settings.RELAY_URL = ""

        with pytest.raises(ValueError):
            RelayClient()
