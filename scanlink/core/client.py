"""HTTP client for the QR code lifecycle API (create/update/delete)."""

from __future__ import annotations

from typing import Any

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .entities import QRCode
from .errors import TransportError

COLLECTION_PATH = "/api/qrcodes"


def http_session(timeout: int = 20) -> requests.Session:
    s = requests.Session()
    # POST is left out so a retried create can never produce a second code.
    retries = Retry(
        total=3,
        backoff_factor=0.6,
        status_forcelist=(429, 500, 502, 503, 504),
        allowed_methods=("GET", "PATCH", "DELETE"),
        raise_on_status=False,
    )
    adapter = HTTPAdapter(max_retries=retries)
    s.mount("https://", adapter)
    s.mount("http://", adapter)
    # store desired default timeout on the session for convenience
    s.request_timeout = timeout  # type: ignore[attr-defined]
    return s


class QRCodeClient:
    def __init__(self, base_url: str, *, session: requests.Session | None = None, timeout: int = 20) -> None:
        self.base_url = base_url.rstrip("/")
        self._http = session if session is not None else http_session(timeout)
        self.timeout = getattr(self._http, "request_timeout", timeout)

    def collection_url(self) -> str:
        return f"{self.base_url}{COLLECTION_PATH}"

    def item_url(self, code_id: str) -> str:
        return f"{self.base_url}{COLLECTION_PATH}/{code_id}"

    def create(self, body: dict[str, Any]) -> QRCode:
        response = self._request("POST", self.collection_url(), json=body)
        return _qrcode_from_response(response)

    def update(self, code_id: str, body: dict[str, Any]) -> QRCode:
        if not code_id:
            raise ValueError("code_id is required for an update")
        response = self._request("PATCH", self.item_url(code_id), json=body)
        return _qrcode_from_response(response)

    def delete(self, code_id: str) -> None:
        if not code_id:
            raise ValueError("code_id is required for a delete")
        self._request("DELETE", self.item_url(code_id))

    def get(self, code_id: str) -> QRCode:
        response = self._request("GET", self.item_url(code_id))
        return _qrcode_from_response(response)

    def list_codes(self) -> list[QRCode]:
        response = self._request("GET", self.collection_url())
        payload = _json_body(response)
        if not isinstance(payload, list):
            raise TransportError("Expected a list of QR codes", status_code=response.status_code)
        return [QRCode.from_payload(item) for item in payload if isinstance(item, dict)]

    def _request(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        headers = {"Content-Type": "application/json", "Accept": "application/json"}
        try:
            response = self._http.request(method, url, headers=headers, timeout=self.timeout, **kwargs)
            response.raise_for_status()
        except requests.HTTPError as exc:
            status = getattr(exc.response, "status_code", 502) or 502
            text = getattr(exc.response, "text", str(exc))
            raise TransportError(
                f"{method} {url} failed with status {status}",
                status_code=status,
                detail=text,
            ) from exc
        except requests.RequestException as exc:
            raise TransportError(f"{method} {url} failed: {exc}", detail=str(exc)) from exc
        return response


def _json_body(response: requests.Response) -> Any:
    try:
        return response.json()
    except ValueError as exc:
        raise TransportError("Response body is not valid JSON", status_code=response.status_code) from exc


def _qrcode_from_response(response: requests.Response) -> QRCode:
    payload = _json_body(response)
    try:
        qrcode = QRCode.from_payload(payload)
    except ValueError as exc:
        raise TransportError(f"Unexpected QR code payload: {exc}", status_code=response.status_code) from exc
    if qrcode.id is None:
        raise TransportError("Persisted QR code has no id", status_code=response.status_code)
    return qrcode


__all__ = ["COLLECTION_PATH", "QRCodeClient", "http_session"]
