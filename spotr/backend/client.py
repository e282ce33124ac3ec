"""HTTP client for the Spotr REST API."""

import logging
from typing import Any, Optional
from urllib.parse import quote

import httpx

from spotr.errors import BackendError, InputValidationError, NotFoundError, TransportError

logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"
API_KEY_HEADER = "X-Spotr-Api-Key"


def require_id(field_name: str, value: str) -> str:
    if not value or not value.strip():
        raise InputValidationError.single(field_name, "must not be empty")
    return value


def _segment(field_name: str, value: str) -> str:
    """Encode an identifier as a single URL path segment."""
    require_id(field_name, value)
    if value in (".", ".."):
        raise InputValidationError.single(field_name, "is not a valid identifier")
    return quote(value, safe="")


def _error_detail(response: httpx.Response) -> Optional[str]:
    """Pull a short message out of an error body, if the backend sent one."""
    try:
        body = response.json()
    except ValueError:
        text = response.text.strip()
        return text[:200] or None
    if isinstance(body, dict):
        for key in ("message", "error", "detail"):
            if isinstance(body.get(key), str):
                return body[key]
    return None


class SpotrClient:
    """
    One coroutine per backend operation.

    Every call opens its own ``httpx.AsyncClient``, performs exactly one
    request and returns the decoded JSON body. Non-2xx answers raise
    ``NotFoundError`` (404) or ``BackendError``; connection failures raise
    ``TransportError``.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        kwargs: dict[str, Any] = {"headers": {API_KEY_HEADER: self.api_key}}
        if self.timeout is not None:
            kwargs["timeout"] = self.timeout
        if self._transport is not None:
            kwargs["transport"] = self._transport
        return httpx.AsyncClient(**kwargs)

    def build_url(self, path: str) -> str:
        return f"{self.base_url}{API_PREFIX}{path}"

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[dict[str, Any]] = None,
        json: Any = None,
        entity: Optional[str] = None,
        identifier: Optional[str] = None,
    ) -> Any:
        url = self.build_url(path)
        if params:
            params = {k: v for k, v in params.items() if v is not None}
        logger.debug(f"{method} {url}")

        try:
            async with self._client() as client:
                resp = await client.request(method, url, params=params or None, json=json)
        except httpx.TimeoutException:
            raise TransportError("request timed out") from None
        except httpx.RequestError as e:
            raise TransportError(f"{type(e).__name__}: could not reach {self.base_url}") from None

        if resp.status_code == 404 and entity is not None:
            raise NotFoundError(entity, identifier or "", reason=resp.reason_phrase or "Not Found")
        if not resp.is_success:
            raise BackendError(resp.status_code, resp.reason_phrase, _error_detail(resp))

        if not resp.content:
            return None
        try:
            return resp.json()
        except ValueError:
            raise BackendError(
                resp.status_code, resp.reason_phrase, "response body is not valid JSON"
            ) from None

    # Movements

    async def fetch_all_movements(self) -> Any:
        return await self._request("GET", "/movements")

    async def search_exercises(self, criteria: dict[str, Any]) -> Any:
        return await self._request("GET", "/exercises/search", params=criteria)

    # Programs

    async def fetch_all_programs(self) -> Any:
        return await self._request("GET", "/programs")

    async def fetch_program(self, program_id: str) -> Any:
        path = f"/programs/{_segment('program_id', program_id)}"
        return await self._request("GET", path, entity="program", identifier=program_id)

    async def create_program(self, payload: dict[str, Any]) -> Any:
        return await self._request("POST", "/programs", json=payload)

    async def update_program(self, program_id: str, payload: dict[str, Any]) -> Any:
        path = f"/programs/{_segment('program_id', program_id)}"
        return await self._request(
            "PUT", path, json=payload, entity="program", identifier=program_id
        )

    async def delete_program(self, program_id: str) -> None:
        path = f"/programs/{_segment('program_id', program_id)}"
        await self._request("DELETE", path, entity="program", identifier=program_id)

    # Blueprints

    async def fetch_all_blueprints(self) -> Any:
        return await self._request("GET", "/blueprints")

    async def fetch_blueprint(self, blueprint_id: str) -> Any:
        path = f"/blueprints/{_segment('blueprint_id', blueprint_id)}"
        return await self._request("GET", path, entity="blueprint", identifier=blueprint_id)

    async def create_blueprint(self, payload: dict[str, Any]) -> Any:
        return await self._request("POST", "/blueprints", json=payload)

    # Coaches and clients

    async def fetch_coach(self, coach_id: str) -> Any:
        path = f"/coaches/{_segment('coach_id', coach_id)}"
        return await self._request("GET", path, entity="coach", identifier=coach_id)

    async def fetch_coach_style(self, coach_id: str) -> Any:
        path = f"/coaches/{_segment('coach_id', coach_id)}/style"
        return await self._request("GET", path, entity="coach", identifier=coach_id)

    async def fetch_client(self, client_id: str) -> Any:
        path = f"/clients/{_segment('client_id', client_id)}"
        return await self._request("GET", path, entity="client", identifier=client_id)

    async def fetch_client_progress(self, client_id: str, program_id: str) -> Any:
        path = (
            f"/clients/{_segment('client_id', client_id)}"
            f"/programs/{_segment('program_id', program_id)}/progress"
        )
        return await self._request(
            "GET", path, entity="progress", identifier=f"{client_id}/{program_id}"
        )

    # Analyses, evaluations and sharing

    async def create_progress_analysis(self, payload: dict[str, Any]) -> Any:
        path = (
            f"/clients/{_segment('client_id', payload.get('client_id', ''))}"
            f"/programs/{_segment('program_id', payload.get('program_id', ''))}/analysis"
        )
        return await self._request("POST", path, json=payload)

    async def create_evaluation(self, payload: dict[str, Any]) -> Any:
        return await self._request("POST", "/evaluations", json=payload)

    async def create_share_link(self, payload: dict[str, Any]) -> Any:
        return await self._request("POST", "/share", json=payload)
