"""JSON API routes: /health, /api/qrcodes/*, /qrcodes/{id}/scan."""


import json
import logging

from fastapi import APIRouter, HTTPException, Request, Response
from fastapi.responses import RedirectResponse

from ...core.logging import qrcode_to_loggable
from ...core.urls import destination_url
from ..config import get_settings
from ..schemas import QRCodeWriteRequest
from ..store import QRCodeNotFound, QRCodeStore

settings = get_settings()
logger = logging.getLogger("uvicorn.error")
router = APIRouter()


def _store(request: Request) -> QRCodeStore:
    return request.app.state.store


def _not_found(code_id: str) -> HTTPException:
    return HTTPException(status_code=404, detail=f"QR code {code_id} not found")


@router.get("/health")
def health() -> dict:
    return {"status": "ok", "app": settings.app_name}


@router.get("/api/qrcodes")
def list_qrcodes(request: Request) -> list[dict]:
    return [qrcode.to_dict() for qrcode in _store(request).list()]


@router.post("/api/qrcodes")
def create_qrcode(payload: QRCodeWriteRequest, request: Request) -> dict:
    qrcode = _store(request).create(payload)
    logger.debug(
        "Created QR code summary:\n%s",
        json.dumps(qrcode_to_loggable(qrcode), ensure_ascii=False, indent=2),
    )
    return qrcode.to_dict()


@router.get("/api/qrcodes/{code_id}")
def get_qrcode(code_id: str, request: Request) -> dict:
    try:
        return _store(request).get(code_id).to_dict()
    except QRCodeNotFound as exc:
        raise _not_found(code_id) from exc


@router.patch("/api/qrcodes/{code_id}")
def update_qrcode(code_id: str, payload: QRCodeWriteRequest, request: Request) -> dict:
    try:
        qrcode = _store(request).update(code_id, payload)
    except QRCodeNotFound as exc:
        raise _not_found(code_id) from exc
    logger.debug(
        "Updated QR code summary:\n%s",
        json.dumps(qrcode_to_loggable(qrcode), ensure_ascii=False, indent=2),
    )
    return qrcode.to_dict()


@router.delete("/api/qrcodes/{code_id}")
def delete_qrcode(code_id: str, request: Request) -> Response:
    try:
        _store(request).delete(code_id)
    except QRCodeNotFound as exc:
        raise _not_found(code_id) from exc
    return Response(status_code=204)


@router.get("/qrcodes/{code_id}/scan")
def scan_qrcode(code_id: str, request: Request) -> RedirectResponse:
    try:
        qrcode = _store(request).record_scan(code_id)
    except QRCodeNotFound as exc:
        raise _not_found(code_id) from exc
    try:
        target = destination_url(
            qrcode.destination,
            host=settings.shop_origin,
            handle=qrcode.handle,
            variant_id=qrcode.variant_id,
            discount_code=qrcode.discount_code,
        )
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return RedirectResponse(target, status_code=302)
