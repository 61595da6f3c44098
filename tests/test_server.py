from __future__ import annotations

import asyncio

import httpx
import pytest
from starlette.testclient import TestClient

from api_explorer.config import Settings
from api_explorer.server import build_app

from conftest import make_service

DOC = {
    "paths": {
        "/users/{id}": {
            "get": {"summary": "Get user", "parameters": [{"name": "id", "in": "path"}]}
        }
    }
}


def _doc_handler(request: httpx.Request) -> httpx.Response:
    return httpx.Response(200, json=DOC)


@pytest.fixture()
def api_requests() -> list[httpx.Request]:
    return []


@pytest.fixture()
def client(session, api_requests) -> TestClient:
    def api_handler(request: httpx.Request) -> httpx.Response:
        api_requests.append(request)
        if request.url.path.endswith("/0"):
            raise httpx.ConnectError("Network Error", request=request)
        return httpx.Response(404, json={"error": "not found"})

    app = build_app(Settings(), service=make_service(_doc_handler, api_handler, session))
    with TestClient(app) as test_client:
        yield test_client


def _mount(client: TestClient) -> str:
    return client.get("/api/endpoints").json()["view"]


def test_index_serves_explorer_page(client: TestClient) -> None:
    response = client.get("/")

    assert response.status_code == 200
    assert "text/html" in response.headers["content-type"]
    assert "API Documentation" in response.text


def test_healthcheck(client: TestClient) -> None:
    assert client.get("/health").json() == {"status": "ok"}


def test_list_endpoints(client: TestClient) -> None:
    response = client.get("/api/endpoints")

    assert response.status_code == 200
    payload = response.json()
    assert payload["view"]
    assert len(payload["endpoints"]) == 1
    endpoint = payload["endpoints"][0]
    assert endpoint["method"] == "get"
    assert endpoint["path"] == "/users/{id}"
    assert endpoint["description"] == "Get user"
    assert endpoint["params"] == ["id"]
    assert endpoint["state"]["status"] == "idle"


def test_each_page_load_gets_a_new_view(client: TestClient) -> None:
    assert _mount(client) != _mount(client)


def test_invoke_reports_non_2xx_as_result(client: TestClient, api_requests) -> None:
    view_id = _mount(client)

    response = client.post(f"/api/views/{view_id}/endpoints/0/invoke", json={"params": {"id": "7"}})

    assert response.status_code == 200
    state = response.json()["state"]
    assert state["status"] == "succeeded"
    assert state["result"]["status"] == 404
    assert state["result"]["data"] == {"error": "not found"}
    assert str(api_requests[0].url) == "http://api.test/users/7"
    assert api_requests[0].headers["apikey"] == "secret-key"


def test_invoke_reports_transport_failure(client: TestClient) -> None:
    view_id = _mount(client)

    response = client.post(f"/api/views/{view_id}/endpoints/0/invoke", json={"params": {"id": "0"}})

    state = response.json()["state"]
    assert state["status"] == "failed"
    assert state["error"] == {"status": None, "data": {"message": "Network Error"}, "category": "unknown"}


def test_invoke_unknown_endpoint(client: TestClient) -> None:
    view_id = _mount(client)

    response = client.post(f"/api/views/{view_id}/endpoints/5/invoke", json={"params": {}})

    assert response.status_code == 404


def test_invoke_unknown_view(client: TestClient) -> None:
    _mount(client)

    response = client.post("/api/views/nope/endpoints/0/invoke", json={"params": {}})

    assert response.status_code == 404


def test_unmounted_view_is_gone(client: TestClient) -> None:
    view_id = _mount(client)

    assert client.delete(f"/api/views/{view_id}").json() == {"status": "deleted"}
    response = client.post(f"/api/views/{view_id}/endpoints/0/invoke", json={"params": {}})

    assert response.status_code == 404


def test_invoke_invalid_payload(client: TestClient) -> None:
    view_id = _mount(client)

    response = client.post(f"/api/views/{view_id}/endpoints/0/invoke", json={"params": ["id"]})

    assert response.status_code == 422
    assert response.json()["error"] == "Invalid payload"


def test_list_endpoints_load_failure(session) -> None:
    def failing(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("unreachable", request=request)

    app = build_app(Settings(), service=make_service(failing, failing, session))
    with TestClient(app) as test_client:
        response = test_client.get("/api/endpoints")

    assert response.status_code == 502
    assert response.json() == {"error": "Failed to load API documentation."}


def test_concurrent_pages_keep_their_own_units(session) -> None:
    doc_status = {"code": 200}

    def doc_handler(request: httpx.Request) -> httpx.Response:
        if doc_status["code"] != 200:
            return httpx.Response(doc_status["code"])
        return httpx.Response(200, json=DOC)

    async def scenario() -> dict:
        started = asyncio.Event()
        release = asyncio.Event()

        async def api_handler(request: httpx.Request) -> httpx.Response:
            if request.url.path == "/users/slow":
                started.set()
                await release.wait()
                return httpx.Response(201, json={"ok": True})
            return httpx.Response(200, json={"id": 7})

        app = build_app(Settings(), service=make_service(doc_handler, api_handler, session))
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://explorer") as client:
            page_a = (await client.get("/api/endpoints")).json()["view"]
            page_b = (await client.get("/api/endpoints")).json()["view"]
            url_a = f"/api/views/{page_a}/endpoints/0/invoke"
            url_b = f"/api/views/{page_b}/endpoints/0/invoke"

            slow = asyncio.create_task(client.post(url_a, json={"params": {"id": "slow"}}))
            await started.wait()

            busy = await client.post(url_a, json={"params": {"id": "7"}})
            other_page = await client.post(url_b, json={"params": {"id": "7"}})
            doc_status["code"] = 503
            failed_mount = await client.get("/api/endpoints")

            release.set()
            finished = await slow

        return {
            "busy": busy,
            "other_page": other_page,
            "failed_mount": failed_mount,
            "finished": finished,
        }

    responses = asyncio.run(scenario())

    assert responses["busy"].status_code == 409
    assert responses["other_page"].status_code == 200
    assert responses["other_page"].json()["state"]["result"]["status"] == 200
    assert responses["failed_mount"].status_code == 502
    assert responses["finished"].status_code == 200
    state = responses["finished"].json()["state"]
    assert state["status"] == "succeeded"
    assert state["result"]["status"] == 201
    assert state["result"]["data"] == {"ok": True}
    assert state["params"] == {"id": "slow"}
