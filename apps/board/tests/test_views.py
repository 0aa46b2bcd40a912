from http import HTTPStatus

import pytest
from channels.routing import URLRouter
from channels.testing import WebsocketCommunicator
from django.test import AsyncClient

from apps.board.gateway import board_gateways
from apps.board.routing import websocket_urlpatterns


@pytest.mark.parametrize("path", ["/ws", "/ws/", "/api/ws", "/boards/ops/ws"])
def test_plain_http_on_ws_route_requires_upgrade(client, path):
    resp = client.get(path)

    assert resp.status_code == HTTPStatus.UPGRADE_REQUIRED
    assert resp["Upgrade"] == "websocket"
    assert "error" in resp.json()
    assert board_gateways.names() == []


def test_broadcast_rejects_get(client):
    resp = client.get("/broadcast")

    assert resp.status_code == HTTPStatus.METHOD_NOT_ALLOWED


def test_status_of_unknown_board_does_not_create_it(client):
    resp = client.get("/boards/ghost/status")

    assert resp.status_code == HTTPStatus.OK
    assert resp.json() == {"board": "ghost", "connections": 0, "agents": []}
    assert "ghost" not in board_gateways


def test_health(client, make_connection):
    board_gateways.get("main").join(make_connection("a"), "alice")

    resp = client.get("/health/")

    assert resp.status_code == HTTPStatus.OK
    data = resp.json()
    assert data["status"] == "healthy"
    assert data["boards"] == {"main": 1}


@pytest.mark.asyncio
class TestBroadcastEndpoint:
    async def test_broadcast_without_connections_still_succeeds(self):
        resp = await AsyncClient().post(
            "/broadcast", {"type": "task_created", "taskId": "abc"}, content_type="application/json"
        )

        assert resp.status_code == HTTPStatus.OK
        assert resp.json() == {"success": True}
        await board_gateways.get("main").drain()

    @pytest.mark.parametrize("body", ["isso não é json", "", "[1, 2]", '"task_created"', "null"])
    async def test_broadcast_rejects_non_object_payload(self, body):
        resp = await AsyncClient().post("/broadcast", body, content_type="application/json")

        assert resp.status_code == HTTPStatus.BAD_REQUEST
        assert resp.json()["success"] is False

    async def test_broadcast_fans_out_to_websocket_clients(self):
        application = URLRouter(websocket_urlpatterns)
        clients = []
        for agent in ("alice", "bob"):
            communicator = WebsocketCommunicator(application, f"/api/ws?agent_id={agent}")
            connected, _ = await communicator.connect()
            assert connected
            assert (await communicator.receive_json_from())["type"] == "connected"
            clients.append(communicator)

        resp = await AsyncClient().post(
            "/broadcast",
            {"type": "task_updated", "taskId": "t1", "changes": {"status": "done"}, "timestamp": 5},
            content_type="application/json",
        )
        assert resp.json() == {"success": True}
        await board_gateways.get("main").drain()

        for communicator in clients:
            message = await communicator.receive_json_from()
            assert message["type"] == "task_updated"
            assert message["taskId"] == "t1"
            assert message["changes"] == {"status": "done"}
            assert message["timestamp"] != 5
            assert await communicator.receive_nothing()
            await communicator.disconnect()

    @pytest.mark.parametrize("kind", [{"k": 1}, ["task_created"]])
    async def test_broadcast_accepts_non_string_type(self, make_connection, kind):
        conn = make_connection("a")
        board_gateways.get("main").join(conn, "alice")

        resp = await AsyncClient().post(
            "/broadcast", {"type": kind, "taskId": "abc"}, content_type="application/json"
        )
        await board_gateways.get("main").drain()

        assert resp.status_code == HTTPStatus.OK
        assert resp.json() == {"success": True}
        assert conn.sent[0]["type"] == kind

    async def test_named_board_broadcast(self, make_connection):
        ops_conn, main_conn = make_connection("ops"), make_connection("main")
        board_gateways.get("ops").join(ops_conn, "ops-agent")
        board_gateways.get("main").join(main_conn, "main-agent")

        resp = await AsyncClient().post(
            "/boards/ops/broadcast", {"type": "comment_added", "taskId": "t1", "commentId": "c1"},
            content_type="application/json",
        )
        assert resp.status_code == HTTPStatus.OK
        await board_gateways.get("ops").drain()

        assert ops_conn.sent[0]["commentId"] == "c1"
        assert main_conn.sent == []

    async def test_status_lists_connected_agents(self, make_connection):
        board_gateways.get("ops").join(make_connection("a"), "alice")

        resp = await AsyncClient().get("/boards/ops/status/")

        assert resp.json() == {"board": "ops", "connections": 1, "agents": ["alice"]}


def test_installed_apps_only_serve_the_relay(settings):
    assert settings.INSTALLED_APPS == ["daphne", "channels", "apps.board"]
    assert not hasattr(settings, "STATIC_URL") or settings.STATIC_URL is None
