"""Edit/save state machine for a single QR code draft.

States are derived, not stored::

    clean --edit--> dirty --submit--> submitting --ok--> clean
                      ^                    |
                      +------failure-------+

The create-vs-update decision is made from ``persisted.id`` at the moment the
request is dispatched. Nothing in the submit path captures the id earlier, so
a handler bound before the first create finished still issues an update.
"""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any, Protocol

from .discounts import DiscountCodeCache, DiscountResolver
from .entities import Destination, QRCode
from .errors import TransportError
from .fields import DraftFields
from .logging import qrcode_to_loggable
from .picker import ProductSelector
from .validate import ValidationReport

logger = logging.getLogger(__name__)

LISTING_PATH = "/"


def edit_path(code_id: str) -> str:
    return f"/codes/edit/{code_id}"


class LifecycleClient(Protocol):
    def create(self, body: dict[str, Any]) -> QRCode: ...

    def update(self, code_id: str, body: dict[str, Any]) -> QRCode: ...

    def delete(self, code_id: str) -> None: ...


class EditState(str, Enum):
    CLEAN = "clean"
    DIRTY = "dirty"
    SUBMITTING = "submitting"


class SubmitStatus(str, Enum):
    SAVED = "saved"
    INVALID = "invalid"
    FAILED = "failed"
    REJECTED = "rejected"
    IGNORED = "ignored"


@dataclass(frozen=True)
class SubmitResult:
    status: SubmitStatus
    qrcode: QRCode | None = None
    report: ValidationReport | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.status is SubmitStatus.SAVED


class CodeEditController:
    def __init__(
        self,
        client: LifecycleClient,
        *,
        qrcode: QRCode | None = None,
        navigate: Callable[[str], None] | None = None,
        discount_cache: DiscountCodeCache | None = None,
    ) -> None:
        self._client = client
        self._persisted = qrcode
        self._navigate = navigate
        self._submitting = False
        self._deleting = False
        self._deleted = False
        self._live = True
        self.fields = DraftFields(qrcode)
        self.selector = ProductSelector(self.fields)
        self.discounts = DiscountResolver(discount_cache)

    @property
    def persisted(self) -> QRCode | None:
        return self._persisted

    @property
    def qrcode_id(self) -> str | None:
        return self._persisted.id if self._persisted is not None else None

    @property
    def dirty(self) -> bool:
        return self.fields.dirty

    @property
    def submitting(self) -> bool:
        return self._submitting

    @property
    def live(self) -> bool:
        return self._live

    @property
    def deleted(self) -> bool:
        return self._deleted

    @property
    def state(self) -> EditState:
        if self._submitting:
            return EditState.SUBMITTING
        return EditState.DIRTY if self.fields.dirty else EditState.CLEAN

    @property
    def can_delete(self) -> bool:
        return self._live and not self._submitting and not self._deleting and self.qrcode_id is not None

    def set_destination(self, value: Any) -> None:
        self.fields.destination.set(Destination.parse(value))

    def select_discount(self, identifier: str) -> None:
        identifier = identifier or ""
        self.fields.discount_id.set(identifier)
        self.fields.discount_code.set(self.discounts.code_for(identifier))

    def discard(self) -> bool:
        if self._submitting or self._deleted or not self._live:
            return False
        self.fields.reset()
        self.selector.cancel()
        return True

    def close(self) -> None:
        """Mark the surface as gone; late responses are dropped from here on."""
        self._live = False

    async def submit(self) -> SubmitResult:
        if not self._live or self._deleted:
            return SubmitResult(SubmitStatus.IGNORED)
        if self._submitting or self._deleting:
            logger.debug("Submit ignored: a save or delete is already in flight.")
            return SubmitResult(SubmitStatus.REJECTED)
        if not self.fields.validate():
            return SubmitResult(SubmitStatus.INVALID, report=self.fields.report())

        self._submitting = True
        submitted = self.fields.values()
        submitted_display = self.fields.display
        body = self.fields.to_body()
        try:
            created, saved = await self._dispatch(body)
        except TransportError as exc:
            logger.warning("Saving QR code failed: %s", exc)
            return SubmitResult(SubmitStatus.FAILED, error=str(exc))
        finally:
            self._submitting = False

        if not self._live:
            logger.debug("Dropping save response for QR code %s: surface closed.", saved.id)
            return SubmitResult(SubmitStatus.IGNORED, qrcode=saved)

        self._persisted = saved
        self.fields.commit(saved, submitted=submitted, submitted_display=submitted_display)
        if logger.isEnabledFor(logging.DEBUG):
            loggable = qrcode_to_loggable(saved)
            if loggable is not None:
                logger.debug("Saved QR code summary:\n%s", json.dumps(loggable, ensure_ascii=False, indent=2))
        if created and self._navigate is not None:
            self._navigate(edit_path(saved.id))
        return SubmitResult(SubmitStatus.SAVED, qrcode=saved)

    async def _dispatch(self, body: dict[str, Any]) -> tuple[bool, QRCode]:
        code_id = self.qrcode_id
        if code_id:
            saved = await asyncio.to_thread(self._client.update, code_id, body)
            return False, saved
        saved = await asyncio.to_thread(self._client.create, body)
        return True, saved

    async def delete(self) -> bool:
        if not self.can_delete:
            return False
        code_id = self.qrcode_id
        self._deleting = True
        try:
            await asyncio.to_thread(self._client.delete, code_id)
        except TransportError as exc:
            logger.warning("Deleting QR code %s failed: %s", code_id, exc)
            return False
        finally:
            self._deleting = False

        # the entity is gone; later submits and deletes are refused
        self._persisted = None
        self._deleted = True
        logger.info("Deleted QR code %s.", code_id)
        if self._live and self._navigate is not None:
            self._navigate(LISTING_PATH)
        return True


__all__ = [
    "CodeEditController",
    "EditState",
    "LISTING_PATH",
    "LifecycleClient",
    "SubmitResult",
    "SubmitStatus",
    "edit_path",
]
