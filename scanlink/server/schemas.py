from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..core.entities import Destination


class QRCodeWriteRequest(BaseModel):
    """Body of ``POST /api/qrcodes`` and ``PATCH /api/qrcodes/{id}``."""

    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(..., examples=["Summer sale poster"])
    product_id: str = Field(..., alias="productId", examples=["gid://shopify/Product/1"])
    variant_id: str = Field(default="", alias="variantId")
    handle: str = Field(default="")
    destination: Destination = Field(default=Destination.PRODUCT)
    discount_id: str = Field(default="", alias="discountId")
    discount_code: str = Field(default="", alias="discountCode")

    @model_validator(mode="before")
    @classmethod
    def _compat_destination_list(cls, data: Any) -> Any:
        """Accept the legacy single-choice list form, e.g. ``["checkout"]``."""
        if isinstance(data, dict) and isinstance(data.get("destination"), list):
            data = dict(data)
            data["destination"] = Destination.parse(data["destination"]).value
        return data

    @field_validator("title", "product_id")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be empty")
        return value.strip()
