"""Tests for the HTTP routes of both personalities."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from remotecontrol.config import ServerConfig
from remotecontrol.server import AmfHandler, ServerState, build_servers, create_amf_app, create_app


@pytest.fixture
def client() -> TestClient:
    return TestClient(create_app(ServerState.build(exec_timeout=2.0)))


@pytest.fixture
def amf_client() -> TestClient:
    return TestClient(create_amf_app(AmfHandler()))


class TestTreeRoutes:
    """Context tree personality."""

    def test_readiness(self, client: TestClient) -> None:
        response = client.get("/api/context")
        assert response.status_code == 200
        assert response.json()["status"] == "ready"

    def test_list_objects(self, client: TestClient) -> None:
        response = client.get("/api/context/node/ue")
        assert response.json() == {"type": "ue", "objects": ["ue1", "ue2", "ue3"]}

    def test_list_objects_unknown_type(self, client: TestClient) -> None:
        response = client.get("/api/context/node/router")
        assert response.status_code == 404
        assert "error" in response.json()

    def test_node_commands_from_catalog(self, client: TestClient) -> None:
        response = client.get("/api/context/node/gnb/gnb1/commands")
        assert response.status_code == 200
        body = response.json()
        assert [c["name"] for c in body] == ["release-ue", "release-session"]
        assert body[1]["argsUsage"] == "<ue-id>"
        assert body[1]["flags"][0]["defaultText"] == "1"

    def test_node_commands_unknown(self, client: TestClient) -> None:
        response = client.get("/api/context/node/router/r1/commands")
        assert response.status_code == 404
        assert response.json() == {"error": "Node context not found"}

    def test_navigate_uses_camel_case(self, client: TestClient) -> None:
        response = client.post(
            "/api/context/navigate",
            json={"currentContext": "root", "command": "connect", "args": ["http://h:4000"]},
        )
        assert response.status_code == 200
        body = response.json()
        assert body["context"]["type"] == "server"
        assert body["prompt"] == ">>> "
        assert "error" not in body

    def test_navigate_error_is_400(self, client: TestClient) -> None:
        response = client.post(
            "/api/context/navigate",
            json={"currentContext": "ue", "command": "select", "args": ["ue42"]},
        )
        assert response.status_code == 400
        assert response.json() == {"error": "Node 'ue42' not found", "prompt": "", "message": "", "commands": []}

    def test_malformed_navigate_body(self, client: TestClient) -> None:
        response = client.post("/api/context/navigate", json={"args": "not-a-list"})
        assert response.status_code == 400
        assert response.json()["error"].startswith("Invalid request format: ")

    def test_exec_success(self, client: TestClient) -> None:
        response = client.post(
            "/api/exec",
            json={"nodeType": "emulator", "nodeName": "emulator", "commandPath": "list-gnb"},
        )
        assert response.status_code == 200
        assert response.json() == {"response": "gnb1\ngnb2"}

    def test_exec_routing_error(self, client: TestClient) -> None:
        response = client.post("/api/exec", json={"nodeType": "ue", "commandPath": "teleport"})
        assert response.status_code == 400
        assert response.json() == {"error": "command not found: teleport"}

    def test_exec_unknown_flag(self, client: TestClient) -> None:
        response = client.post(
            "/api/exec",
            json={"nodeType": "ue", "nodeName": "ue1", "rawCommand": "register --fast"},
        )
        assert response.status_code == 400
        assert response.json()["error"] == "flag provided but not defined: -fast"

    def test_full_walk(self, client: TestClient) -> None:
        """Connect, use, select, exec, back, disconnect over HTTP."""
        steps = [
            ({"currentContext": "root", "command": "connect", "args": ["http://h"]}, "server"),
            ({"currentContext": "server", "command": "use", "args": ["ue"]}, "ue"),
            ({"currentContext": "ue", "command": "select", "args": ["ue3"], "contextType": "context_set"}, "ue3"),
        ]
        for body, expected in steps:
            assert client.post("/api/context/navigate", json=body).json()["context"]["name"] == expected

        exec_response = client.post(
            "/api/exec",
            json={"nodeType": "ue", "nodeName": "ue3", "commandPath": "deregister", "args": ["--type", "2"]},
        )
        assert exec_response.json()["response"] == "UE ue3 deregistered successfully"

        back = client.post(
            "/api/context/navigate",
            json={"currentContext": "ue3", "nodeType": "ue", "command": "back"},
        ).json()
        assert back["context"]["name"] == "ue"

        gone = client.post(
            "/api/context/navigate",
            json={"currentContext": "ue", "command": "disconnect"},
        ).json()
        assert gone["context"]["type"] == "root"


class TestAmfRoutes:
    """AMF personality."""

    def test_status(self, amf_client: TestClient) -> None:
        assert amf_client.get("/api/status").json() == {"status": "ok", "service": "amf"}

    def test_no_tree_readiness(self, amf_client: TestClient) -> None:
        assert amf_client.get("/api/context").status_code == 404

    def test_connect(self, amf_client: TestClient) -> None:
        body = amf_client.post(
            "/api/context/navigate",
            json={"currentContext": "root", "command": "connect", "args": ["http://h:6000"]},
        ).json()
        assert body["context"]["type"] == "amf"
        assert body["context"]["nodeType"] == "amf"
        assert body["message"] == "Connected to AMF: http://h:6000, type help to see commands"
        assert "list-ues" in body["context"]["commands"]
        assert "disconnect" in body["context"]["commands"]

    @pytest.mark.parametrize("command", ["disconnect", "back"])
    def test_leave(self, amf_client: TestClient, command: str) -> None:
        body = amf_client.post(
            "/api/context/navigate", json={"currentContext": "amf", "command": command}
        ).json()
        assert body["context"]["type"] == "root"
        assert body["message"] == "Disconnect AMF successfully."

    def test_exec_help(self, amf_client: TestClient) -> None:
        text = amf_client.post("/api/exec", json={"commandPath": "help"}).json()["response"]
        assert text.startswith("\nCommands:\n")
        assert f"  {'list-ues':<20} List all UE contexts\n" in text

    @pytest.mark.parametrize("command", ["clear", "exit"])
    def test_exec_client_side_commands(self, amf_client: TestClient, command: str) -> None:
        assert amf_client.post("/api/exec", json={"commandPath": command}).json() == {"response": ""}

    def test_exec_disconnect(self, amf_client: TestClient) -> None:
        body = amf_client.post("/api/exec", json={"rawCommand": "disconnect"}).json()
        assert body == {"response": "Disconnect AMF successfully."}

    def test_exec_catalog_command(self, amf_client: TestClient) -> None:
        body = amf_client.post(
            "/api/exec", json={"nodeType": "amf", "rawCommand": "register-ue imsi-999"}
        ).json()
        assert body == {"response": "UE imsi-999 registered successfully"}

    def test_exec_help_flag_for_command(self, amf_client: TestClient) -> None:
        body = amf_client.post(
            "/api/exec", json={"commandPath": "deregister-ue", "args": ["--help"]}
        ).json()
        assert body["response"].startswith("deregister-ue <imsi>\n\n")

    def test_exec_unknown(self, amf_client: TestClient) -> None:
        response = amf_client.post("/api/exec", json={"commandPath": "reboot"})
        assert response.status_code == 400
        assert response.json() == {"error": "command not found: reboot"}


class TestBuildServers:
    def test_tree_only_by_default(self) -> None:
        servers = build_servers(ServerConfig(host="127.0.0.1", port=4100))
        assert len(servers) == 1
        assert servers[0].config.port == 4100

    def test_amf_listener_when_configured(self) -> None:
        servers = build_servers(ServerConfig(host="127.0.0.1", port=4100, amf_port=6100))
        assert [s.config.port for s in servers] == [4100, 6100]
