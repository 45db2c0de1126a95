import json

import pytest

from scanlink.cli import main as cli


def test_preview_prints_destination_url(capsys) -> None:
    code = cli.main(
        [
            "preview",
            "red-shoes",
            "--mode",
            "checkout",
            "--variant",
            "v1",
            "--discount-code",
            "SAVE10",
            "--host",
            "https://demo.myshopify.com",
        ]
    )

    assert code == 0
    out = json.loads(capsys.readouterr().out)
    assert out == {"destination": "checkout", "url": "https://demo.myshopify.com/cart/v1:1?discount=SAVE10"}


def test_delete_calls_lifecycle_client(monkeypatch, capsys) -> None:
    deleted: list[str] = []
    monkeypatch.setattr(cli.QRCodeClient, "delete", lambda self, code_id: deleted.append(code_id))

    assert cli.main(["delete", "7", "--api-base-url", "http://api.test"]) == 0
    assert deleted == ["7"]
    assert json.loads(capsys.readouterr().out) == {"deleted": "7"}


def test_discounts_lists_first_page_options(monkeypatch, capsys) -> None:
    page = {
        "data": {
            "codeDiscountNodes": {
                "edges": [{"node": {"id": "gid://d/1", "codeDiscount": {"codes": {"edges": [{"node": {"code": "SAVE10"}}]}}}}]
            }
        }
    }
    requested: list[int] = []

    def fake_fetch_page(self, first=25):
        requested.append(first)
        return page

    monkeypatch.setattr("scanlink.core.discounts.DiscountCatalog.fetch_page", fake_fetch_page)

    assert cli.main(["discounts", "--first", "10"]) == 0
    assert requested == [10]
    assert json.loads(capsys.readouterr().out) == [
        {"label": "No discount", "value": ""},
        {"label": "SAVE10", "value": "gid://d/1"},
    ]


def test_failing_command_exits_with_status_2(capsys) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["preview", "", "--host", "https://demo.myshopify.com"])

    assert excinfo.value.code == 2
    assert "error:" in capsys.readouterr().err
