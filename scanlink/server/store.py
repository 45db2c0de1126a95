"""In-memory QR code store backing the reference API."""

from __future__ import annotations

import itertools
import threading
from dataclasses import replace

from ..core.entities import QRCode
from .schemas import QRCodeWriteRequest


class QRCodeNotFound(KeyError):
    pass


class QRCodeStore:
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._codes: dict[str, QRCode] = {}
        self._ids = itertools.count(1)

    def list(self) -> list[QRCode]:
        with self._lock:
            return list(self._codes.values())

    def get(self, code_id: str) -> QRCode:
        with self._lock:
            qrcode = self._codes.get(code_id)
        if qrcode is None:
            raise QRCodeNotFound(code_id)
        return qrcode

    def create(self, request: QRCodeWriteRequest) -> QRCode:
        with self._lock:
            code_id = str(next(self._ids))
            qrcode = _from_request(request, code_id=code_id)
            self._codes[code_id] = qrcode
        return qrcode

    def update(self, code_id: str, request: QRCodeWriteRequest) -> QRCode:
        with self._lock:
            current = self._codes.get(code_id)
            if current is None:
                raise QRCodeNotFound(code_id)
            qrcode = _from_request(request, code_id=code_id, scans=current.scans)
            self._codes[code_id] = qrcode
        return qrcode

    def delete(self, code_id: str) -> None:
        with self._lock:
            if self._codes.pop(code_id, None) is None:
                raise QRCodeNotFound(code_id)

    def record_scan(self, code_id: str) -> QRCode:
        with self._lock:
            current = self._codes.get(code_id)
            if current is None:
                raise QRCodeNotFound(code_id)
            qrcode = replace(current, scans=current.scans + 1)
            self._codes[code_id] = qrcode
        return qrcode


def _from_request(request: QRCodeWriteRequest, *, code_id: str, scans: int = 0) -> QRCode:
    return QRCode(
        id=code_id,
        title=request.title,
        product_id=request.product_id,
        variant_id=request.variant_id,
        handle=request.handle,
        destination=request.destination,
        discount_id=request.discount_id,
        discount_code=request.discount_code,
        scans=scans,
    )


__all__ = ["QRCodeNotFound", "QRCodeStore"]
