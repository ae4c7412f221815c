# tests/test_http_app.py
from pathlib import Path
import pytest
from fastapi.testclient import TestClient

from repo_mcp.config import Settings
from repo_mcp_server.http_app import create_http_app

TOKEN = "test-token"
AUTH = {"Authorization": f"Bearer {TOKEN}"}


@pytest.fixture
def client(tmp_path: Path) -> TestClient:
    settings = Settings(REPO_PATH=tmp_path, MCP_HTTP_BEARER_TOKEN=TOKEN)
    return TestClient(create_http_app(settings))


def _rpc(client: TestClient, method: str, params=None, headers=AUTH):
    return client.post("/mcp", json={"jsonrpc": "2.0", "id": 1, "method": method, "params": params or {}},
                       headers=headers)


def test_requires_bearer_token(client: TestClient):
    assert _rpc(client, "tools/list", headers={}).status_code == 401
    assert _rpc(client, "tools/list", headers={"Authorization": "Bearer wrong"}).status_code == 401


def test_rejects_unknown_origin(client: TestClient):
    resp = _rpc(client, "tools/list", headers={**AUTH, "Origin": "http://evil.example"})
    assert resp.status_code == 403


def test_initialize(client: TestClient):
    result = _rpc(client, "initialize").json()["result"]
    assert result["serverInfo"]["name"] == "repo-mcp-http"
    assert "tools" in result["capabilities"]


def test_tools_list(client: TestClient):
    tools = _rpc(client, "tools/list").json()["result"]["tools"]
    assert {t["name"] for t in tools} == {
        "read_file", "write_file", "list_directory", "create_directory",
        "delete_file", "search_files", "get_file_info",
    }


def test_tools_call_success_and_error(client: TestClient, tmp_path: Path):
    body = _rpc(client, "tools/call", {"name": "write_file",
                                       "arguments": {"path": "n.txt", "content": "hi"}}).json()
    assert body["result"] == {"content": [{"type": "text", "text": "Successfully wrote to n.txt"}],
                              "isError": False}
    assert (tmp_path / "n.txt").read_text() == "hi"

    body = _rpc(client, "tools/call", {"name": "read_file", "arguments": {"path": "../x"}}).json()
    assert "error" not in body
    assert body["result"]["content"][0]["text"] == "Error: Access denied: Path outside repository"


def test_unknown_method(client: TestClient):
    body = _rpc(client, "resources/list").json()
    assert body["error"]["code"] == -32601


def test_parse_error(client: TestClient):
    resp = client.post("/mcp", content=b"{not json", headers={**AUTH, "Content-Type": "application/json"})
    assert resp.json()["error"]["code"] == -32700


def test_tools_call_with_list_arguments(client: TestClient):
    resp = _rpc(client, "tools/call", {"name": "read_file", "arguments": ["a"]})
    assert resp.status_code == 200
    body = resp.json()
    assert body["result"]["content"][0]["text"] == "Error: Invalid arguments: arguments must be an object"


def test_non_object_params(client: TestClient):
    resp = client.post("/mcp", json={"jsonrpc": "2.0", "id": 7, "method": "tools/call", "params": ["x"]},
                       headers=AUTH)
    assert resp.status_code == 200
    assert resp.json()["error"]["code"] == -32602
