import pytest

from scanlink.core import Destination, QRCode


def test_destination_parse_normalizes_legacy_list_form() -> None:
    assert Destination.parse(["checkout"]) is Destination.CHECKOUT
    assert Destination.parse(" Product ") is Destination.PRODUCT
    assert Destination.parse(Destination.CHECKOUT) is Destination.CHECKOUT


@pytest.mark.parametrize("value", [["product", "checkout"], [], "cart"])
def test_destination_parse_rejects_non_single_choices(value) -> None:
    with pytest.raises(ValueError):
        Destination.parse(value)


def test_qrcode_from_payload_reads_nested_product() -> None:
    qrcode = QRCode.from_payload(
        {
            "id": 3,
            "title": "Poster",
            "product": {
                "id": "gid://shopify/Product/1",
                "handle": "blue-hat",
                "title": "Blue Hat",
                "images": [{"originalSrc": "//cdn.example.com/hat.jpg", "altText": "Hat"}],
            },
            "variantId": "gid://shopify/ProductVariant/11",
            "destination": ["checkout"],
            "discountId": None,
        }
    )

    assert qrcode.id == "3"
    assert qrcode.product_id == "gid://shopify/Product/1"
    assert qrcode.handle == "blue-hat"
    assert qrcode.destination is Destination.CHECKOUT
    assert qrcode.discount_id == ""
    assert qrcode.product.title == "Blue Hat"
    assert qrcode.product.thumbnail.alt_text == "Hat"


def test_qrcode_to_dict_uses_wire_names() -> None:
    data = QRCode(id="3", title="Poster", product_id="p1", destination=Destination.CHECKOUT).to_dict()

    assert data["productId"] == "p1"
    assert data["destination"] == "checkout"
    assert data["product"] is None
