from __future__ import annotations
from typing import Any, Dict, List, Optional

import httpx

HEADERS = {"User-Agent": "riskon-dashboard/0.2"}


class RiskonAPIError(Exception):
    """Transport failure or non-2xx response from the RISKON API."""


class RiskonClient:
    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._http = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            headers=HEADERS,
            timeout=timeout,
            transport=transport,
        )

    async def _request(self, method: str, path: str, **kwargs) -> Any:
        try:
            r = await self._http.request(method, path, **kwargs)
            r.raise_for_status()
            return r.json()
        except httpx.HTTPError as e:
            raise RiskonAPIError(f"{method} {path} failed: {e}") from e

    async def kpis(self) -> Dict[str, Any]:
        return await self._request("GET", "/kpis")

    async def applicants(self) -> List[Dict[str, Any]]:
        return await self._request("GET", "/applicants")

    async def applicant(self, applicant_id: str) -> Dict[str, Any]:
        return await self._request("GET", f"/applicants/{applicant_id}")

    async def analyze(self, applicant_id: str) -> Dict[str, Any]:
        return await self._request("POST", f"/analyze/{applicant_id}")

    async def simulate(
        self, applicant_id: str, income: float, loan_amount: float
    ) -> Dict[str, Any]:
        body = {"id": applicant_id, "income": income, "loanAmount": loan_amount}
        return await self._request("POST", "/simulate", json=body)

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> "RiskonClient":
        return self

    async def __aexit__(self, *exc) -> None:
        await self.aclose()
