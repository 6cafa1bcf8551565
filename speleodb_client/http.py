from __future__ import annotations

from typing import Any

import requests


class ApiHttpError(RuntimeError):
    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code


class NetworkFailureError(ApiHttpError):
    def __init__(self, message: str):
        super().__init__(status_code=0, message=message)


class HttpClient:
    def __init__(self, timeout_seconds: int):
        self._timeout_seconds = timeout_seconds
        self._session = requests.Session()
        self._session.headers.update({"Accept": "application/json"})

    def close(self) -> None:
        self._session.close()

    def post_json(
        self,
        url: str,
        payload: dict[str, Any],
        token: str | None = None,
    ) -> tuple[int, dict[str, Any]]:
        try:
            response = self._session.post(
                url,
                headers=self._auth_headers(token),
                json=payload,
                timeout=self._timeout_seconds,
            )
        except requests.RequestException as error:
            raise NetworkFailureError(str(error)) from error
        return response.status_code, self._parse_body(response)

    def get_json(
        self,
        url: str,
        token: str | None = None,
    ) -> tuple[int, dict[str, Any]]:
        try:
            response = self._session.get(
                url,
                headers=self._auth_headers(token),
                timeout=self._timeout_seconds,
            )
        except requests.RequestException as error:
            raise NetworkFailureError(str(error)) from error
        return response.status_code, self._parse_body(response)

    @staticmethod
    def _auth_headers(token: str | None) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if token:
            headers["Authorization"] = f"Token {token}"
        return headers

    @staticmethod
    def _parse_body(response: requests.Response) -> dict[str, Any]:
        if not response.content:
            return {}
        try:
            parsed = response.json()
        except ValueError:
            return {"raw": response.text[:500]}
        if isinstance(parsed, dict):
            return parsed
        return {"value": parsed}
