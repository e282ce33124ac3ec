"""Tests for the Spotr HTTP client."""

import json

import httpx
import pytest

from spotr.backend import SpotrClient
from spotr.errors import BackendError, InputValidationError, NotFoundError, TransportError


def _client(handler, base_url="https://api.spotr.test/"):
    return SpotrClient(base_url, "secret", transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_get_sends_api_key_and_decodes_json():
    """GET requests should carry the API key and return the decoded body."""
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=[{"id": "program-1"}])

    result = await _client(handler).fetch_all_programs()

    assert result == [{"id": "program-1"}]
    assert len(seen) == 1
    assert seen[0].method == "GET"
    assert str(seen[0].url) == "https://api.spotr.test/api/v1/programs"
    assert seen[0].headers["X-Spotr-Api-Key"] == "secret"


@pytest.mark.asyncio
async def test_search_drops_empty_query_parameters():
    """search_exercises should omit criteria that are None."""
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=[])

    await _client(handler).search_exercises({"muscle_group": "chest", "equipment": None, "limit": 5})

    assert seen[0].url.path == "/api/v1/exercises/search"
    assert dict(seen[0].url.params) == {"muscle_group": "chest", "limit": "5"}


@pytest.mark.asyncio
async def test_create_posts_json_body(program_payload):
    """create_program should POST the payload as JSON."""
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(201, json={"id": "program-1", **json.loads(request.content)})

    result = await _client(handler).create_program(program_payload)

    assert seen[0].method == "POST"
    assert json.loads(seen[0].content) == program_payload
    assert result["id"] == "program-1"


@pytest.mark.asyncio
async def test_update_uses_put_on_program_path():
    """update_program should PUT to the program path."""
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"id": "program-7"})

    await _client(handler).update_program("program-7", {"name": "Renamed"})

    assert seen[0].method == "PUT"
    assert seen[0].url.path == "/api/v1/programs/program-7"


@pytest.mark.asyncio
async def test_delete_discards_body():
    """delete_program should return None on 204."""
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.method == "DELETE"
        return httpx.Response(204)

    assert await _client(handler).delete_program("program-7") is None


@pytest.mark.asyncio
async def test_404_raises_not_found():
    """A 404 on an entity route should raise NotFoundError."""
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, json={"message": "no such program"})

    with pytest.raises(NotFoundError) as excinfo:
        await _client(handler).fetch_program("program-404")

    assert excinfo.value.status == 404
    assert excinfo.value.entity == "program"
    assert excinfo.value.identifier == "program-404"


@pytest.mark.asyncio
async def test_server_error_raises_backend_error():
    """A 5xx should raise BackendError with the backend message."""
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503, json={"error": "maintenance"})

    with pytest.raises(BackendError) as excinfo:
        await _client(handler).fetch_all_blueprints()

    assert excinfo.value.status == 503
    assert excinfo.value.reason == "Service Unavailable"
    assert "maintenance" in str(excinfo.value)


@pytest.mark.asyncio
async def test_malformed_json_raises_backend_error():
    """A non-JSON success body should raise BackendError."""
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=b"<html>oops</html>")

    with pytest.raises(BackendError, match="not valid JSON"):
        await _client(handler).fetch_all_movements()


@pytest.mark.asyncio
async def test_connection_failure_raises_transport_error():
    """Connection errors should raise TransportError without a status."""
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(TransportError) as excinfo:
        await _client(handler).fetch_all_programs()

    assert excinfo.value.status is None


@pytest.mark.asyncio
async def test_empty_id_is_rejected_without_request():
    """Blank identifiers should be rejected before any request."""
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200, json={})

    with pytest.raises(InputValidationError):
        await _client(handler).fetch_program("  ")

    assert calls == []


@pytest.mark.asyncio
async def test_progress_analysis_is_posted_under_client_program():
    """create_progress_analysis should POST under the client program path."""
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(201, json={"id": "analysis-1"})

    await _client(handler).create_progress_analysis({"client_id": "c-1", "program_id": "p-1"})

    assert seen[0].url.path == "/api/v1/clients/c-1/programs/p-1/analysis"


@pytest.mark.asyncio
async def test_identifiers_are_encoded_as_one_path_segment():
    """Reserved characters in an ID should not change the target route."""
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(204)

    client = _client(handler)
    await client.fetch_program("p1?x=1")
    await client.delete_program("p1/../../coaches/c1")
    await client.fetch_client_progress("c 1", "p#2")

    assert seen[0].url.raw_path == b"/api/v1/programs/p1%3Fx%3D1"
    assert seen[0].url.query == b""
    assert seen[1].method == "DELETE"
    assert seen[1].url.raw_path == b"/api/v1/programs/p1%2F..%2F..%2Fcoaches%2Fc1"
    assert seen[2].url.raw_path == b"/api/v1/clients/c%201/programs/p%232/progress"


@pytest.mark.asyncio
async def test_dot_segment_ids_are_rejected():
    """An ID of '..' should be rejected before any request."""
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(204)

    with pytest.raises(InputValidationError):
        await _client(handler).delete_program("..")

    assert calls == []
