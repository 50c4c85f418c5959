import asyncio
import logging
import random
from collections.abc import Mapping, Sequence
from typing import Any

import httpx

from supabase_query_advisor.api.exceptions import (
    AuthenticationError,
    NotFoundError,
    RateLimitError,
    SupabaseAPIError,
)

logger = logging.getLogger(__name__)


class SupabaseRestClient:
    """Async client for a Supabase project's PostgREST endpoint.

    Usage:
        async with SupabaseRestClient(url, key) as client:
            data = await client.rpc("execute_dynamic_query", {"query_sql": sql})

    Authentication:
    - ``apikey`` header plus bearer token, both set to the project key
      (anon or service_role)
    """

    REST_PATH = "/rest/v1"
    MAX_RETRIES = 3
    BASE_BACKOFF = 1.0
    MAX_JITTER = 0.5

    def __init__(self, base_url: str, api_key: str, timeout: float = 30.0) -> None:
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "SupabaseRestClient":
        self._client = httpx.AsyncClient(timeout=self.timeout)
        return self

    async def __aexit__(self, *args: object) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    def _headers(self, extra: Mapping[str, str] | None = None) -> dict[str, str]:
        headers = {
            "apikey": self.api_key,
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        if extra:
            headers.update(extra)
        return headers

    async def _request(
        self,
        method: str,
        endpoint: str,
        *,
        json: Any = None,
        params: Mapping[str, str] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        if not self._client:
            raise RuntimeError("Client not initialized. Use async context manager.")

        url = f"{self.base_url}{self.REST_PATH}{endpoint}"

        retries = 0
        while True:
            response = await self._client.request(
                method,
                url,
                json=json,
                params=dict(params) if params else None,
                headers=self._headers(headers),
            )

            if response.status_code == 429:
                if retries >= self.MAX_RETRIES:
                    retry_after = response.headers.get("Retry-After")
                    raise RateLimitError(
                        "Rate limit exceeded after max retries",
                        retry_after=float(retry_after) if retry_after else None,
                    )

                delay = self.BASE_BACKOFF * (2**retries) + random.uniform(0, self.MAX_JITTER)
                logger.warning("Rate limited on %s %s, retrying in %.2fs", method, endpoint, delay)
                await asyncio.sleep(delay)
                retries += 1
                continue

            if response.status_code == 401:
                raise AuthenticationError("Invalid or expired API key", status_code=401)

            if response.status_code == 404:
                raise NotFoundError(f"Resource not found: {endpoint}", status_code=404)

            if response.status_code >= 400:
                raise self._api_error(response)

            if response.status_code == 204 or not response.content:
                return None
            return response.json()

    @staticmethod
    def _api_error(response: httpx.Response) -> SupabaseAPIError:
        try:
            body = response.json()
        except ValueError:
            body = None

        if isinstance(body, dict):
            return SupabaseAPIError(
                body.get("message") or f"HTTP {response.status_code}",
                status_code=response.status_code,
                code=body.get("code"),
                details=body.get("details"),
            )
        return SupabaseAPIError(f"HTTP {response.status_code}", status_code=response.status_code)

    async def rpc(self, function: str, args: Mapping[str, Any] | None = None) -> Any:
        return await self._request("POST", f"/rpc/{function}", json=dict(args or {}))

    async def insert(
        self, table: str, rows: Sequence[Mapping[str, Any]], returning: bool = True
    ) -> list[dict[str, Any]]:
        prefer = "return=representation" if returning else "return=minimal"
        data = await self._request(
            "POST",
            f"/{table}",
            json=[dict(row) for row in rows],
            headers={"Prefer": prefer},
        )
        return data if isinstance(data, list) else []

    async def select(
        self,
        table: str,
        columns: str = "*",
        order: str | None = None,
        limit: int | None = None,
        filters: Mapping[str, str] | None = None,
    ) -> list[dict[str, Any]]:
        params: dict[str, str] = {"select": columns}
        if order:
            params["order"] = order
        if limit is not None:
            params["limit"] = str(limit)
        if filters:
            params.update(filters)
        data = await self._request("GET", f"/{table}", params=params)
        return data if isinstance(data, list) else []

    async def delete(self, table: str, filters: Mapping[str, str]) -> None:
        if not filters:
            raise ValueError("delete requires at least one filter")
        await self._request("DELETE", f"/{table}", params=filters)
