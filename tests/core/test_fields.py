from scanlink.core import Destination, DraftFields
from scanlink.core.validate import PRODUCT_REQUIRED, TITLE_REQUIRED
from tests.helpers._builders import saved_qrcode


def test_new_draft_uses_create_defaults() -> None:
    fields = DraftFields()

    assert fields.title.value == ""
    assert fields.product_id.value == ""
    assert fields.destination.value is Destination.PRODUCT
    assert fields.discount_id.value == ""
    assert fields.display is None
    assert fields.dirty is False


def test_dirty_tracks_value_inequality_against_committed() -> None:
    fields = DraftFields(saved_qrcode())

    fields.title.set("Counter display")
    assert fields.dirty is True
    assert fields.dirty_fields() == ["title"]

    fields.title.set("Window poster")
    assert fields.dirty is False


def test_validate_reports_title_and_product_errors() -> None:
    fields = DraftFields()
    fields.title.set("   ")

    assert fields.validate() is False
    assert fields.title.error == TITLE_REQUIRED
    assert fields.product_id.error == PRODUCT_REQUIRED
    report = fields.report()
    assert report.valid is False
    assert report.errors_by_field == {"title": TITLE_REQUIRED, "product_id": PRODUCT_REQUIRED}


def test_set_revalidates_a_field_that_already_shows_an_error() -> None:
    fields = DraftFields()
    fields.validate()
    assert fields.title.error == TITLE_REQUIRED

    fields.title.set("Shelf talker")

    assert fields.title.error is None
    assert fields.product_id.error == PRODUCT_REQUIRED


def test_reset_restores_committed_values_and_display() -> None:
    qrcode = saved_qrcode()
    fields = DraftFields(qrcode)
    fields.title.set("Other")
    fields.handle.set("other-handle")
    fields.display = None
    fields.validate()

    fields.reset()

    assert fields.values()["title"] == "Window poster"
    assert fields.handle.value == "blue-hat"
    assert fields.display == qrcode.product
    assert fields.dirty is False
    assert fields.title.error is None


def test_to_body_sends_a_single_destination_value() -> None:
    fields = DraftFields(saved_qrcode(destination=Destination.CHECKOUT))

    body = fields.to_body()

    assert body == {
        "title": "Window poster",
        "productId": "gid://shopify/Product/1",
        "variantId": "gid://shopify/ProductVariant/11",
        "handle": "blue-hat",
        "destination": "checkout",
        "discountId": "",
        "discountCode": "",
    }


def test_commit_keeps_values_edited_after_the_submitted_snapshot() -> None:
    fields = DraftFields(saved_qrcode())
    fields.title.set("Submitted title")
    submitted = fields.values()
    fields.handle.set("edited-later")

    fields.commit(saved_qrcode(title="Submitted title"), submitted=submitted, submitted_display=fields.display)

    assert fields.title.value == "Submitted title"
    assert fields.title.dirty is False
    assert fields.handle.value == "edited-later"
    assert fields.handle.committed == "blue-hat"
    assert fields.dirty_fields() == ["handle"]
