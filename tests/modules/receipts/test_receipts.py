"""Tests for booking receipts and their tax invoices."""

from datetime import date
from decimal import Decimal
from unittest.mock import patch

import pytest
from httpx import AsyncClient
from pydantic import ValidationError as PydanticValidationError

from conftest import AgencySetup, Catalog, auth_headers
from voyage.core.pdf import pdf_service
from voyage.modules.bookings.models import Booking
from voyage.modules.receipts.schemas import ReceiptFields
from voyage.modules.receipts.service import compute_taxes
from voyage.shared.utils.dates import financial_year

FAKE_PDF = b"%PDF-1.4 fake"


def _receipt(booking: Booking, **overrides) -> dict:
    payload = {
        "booking_id": booking.id,
        "receipt_date": "2025-06-10",
        "payment_mode": "Cash",
        "amount": "10000.00",
    }
    payload.update(overrides)
    return payload


class TestComputeTaxes:
    def test_non_gst_receipt_has_no_tax(self):
        data = ReceiptFields(payment_mode="Cash", amount=Decimal("5000"), cgst_percent=Decimal("9"))
        values = compute_taxes(data)
        assert values["cgst_percent"] is None
        assert values["cgst_amount"] == Decimal("0.00")
        assert values["total_amount"] == Decimal("5000.00")

    def test_amounts_derived_from_percentages(self):
        data = ReceiptFields(
            payment_mode="UPI",
            amount=Decimal("10000"),
            is_gst=True,
            cgst_percent=Decimal("2.5"),
            sgst_percent=Decimal("2.5"),
        )
        values = compute_taxes(data)
        assert values["cgst_amount"] == Decimal("250.00")
        assert values["sgst_amount"] == Decimal("250.00")
        assert values["igst_amount"] == Decimal("0.00")
        assert values["total_amount"] == Decimal("10500.00")

    def test_explicit_amount_wins(self):
        data = ReceiptFields(
            payment_mode="Card",
            amount=Decimal("10000"),
            is_gst=True,
            igst_percent=Decimal("5"),
            igst_amount=Decimal("480.00"),
        )
        assert compute_taxes(data)["total_amount"] == Decimal("10480.00")

    def test_igst_amount_excludes_cgst_amounts(self):
        with pytest.raises(PydanticValidationError):
            ReceiptFields(
                payment_mode="Cash",
                amount=Decimal("1000"),
                is_gst=True,
                cgst_amount=Decimal("25"),
                sgst_amount=Decimal("25"),
                igst_amount=Decimal("50"),
            )


class TestCreateReceipt:
    async def test_create(self, client: AsyncClient, setup: AgencySetup, booking: Booking):
        response = await client.post(
            "/api/v1/booking-receipts", headers=auth_headers(setup.staff), json=_receipt(booking)
        )
        assert response.status_code == 201
        data = response.json()["data"]
        assert data["receipt_number"] == "RCPT/2025-26/001"
        assert Decimal(data["total_amount"]) == Decimal("10000")
        assert data["invoice_number"] is None

    async def test_gst_receipt(self, client: AsyncClient, setup: AgencySetup, booking: Booking):
        response = await client.post(
            "/api/v1/booking-receipts",
            headers=auth_headers(setup.staff),
            json=_receipt(booking, is_gst=True, cgst_percent="2.5", sgst_percent="2.5"),
        )
        data = response.json()["data"]
        assert Decimal(data["cgst_amount"]) == Decimal("250")
        assert Decimal(data["total_amount"]) == Decimal("10500")

    async def test_sequential_numbers(self, client: AsyncClient, setup: AgencySetup, booking: Booking):
        for _ in range(2):
            response = await client.post(
                "/api/v1/booking-receipts", headers=auth_headers(setup.staff), json=_receipt(booking)
            )
        assert response.json()["data"]["receipt_number"] == "RCPT/2025-26/002"

    async def test_cheque_requires_number(
        self, client: AsyncClient, setup: AgencySetup, booking: Booking
    ):
        response = await client.post(
            "/api/v1/booking-receipts",
            headers=auth_headers(setup.staff),
            json=_receipt(booking, payment_mode="Cheque"),
        )
        assert response.status_code == 422

    async def test_cheque_with_bank(
        self, client: AsyncClient, setup: AgencySetup, catalog: Catalog, booking: Booking
    ):
        response = await client.post(
            "/api/v1/booking-receipts",
            headers=auth_headers(setup.staff),
            json=_receipt(
                booking,
                payment_mode="Cheque",
                cheque_number="004512",
                cheque_date="2025-06-09",
                bank_id=catalog.bank.id,
            ),
        )
        assert response.status_code == 201
        assert response.json()["data"]["bank"]["name"] == "HDFC Bank"

    async def test_igst_excludes_cgst(self, client: AsyncClient, setup: AgencySetup, booking: Booking):
        response = await client.post(
            "/api/v1/booking-receipts",
            headers=auth_headers(setup.staff),
            json=_receipt(booking, is_gst=True, cgst_percent="2.5", igst_percent="5"),
        )
        assert response.status_code == 422

    async def test_igst_amount_excludes_cgst_amount(
        self, client: AsyncClient, setup: AgencySetup, booking: Booking
    ):
        response = await client.post(
            "/api/v1/booking-receipts",
            headers=auth_headers(setup.staff),
            json=_receipt(booking, is_gst=True, cgst_amount="250", sgst_amount="250", igst_amount="500"),
        )
        assert response.status_code == 422

    async def test_exactly_one_parent(self, client: AsyncClient, setup: AgencySetup):
        response = await client.post(
            "/api/v1/booking-receipts",
            headers=auth_headers(setup.staff),
            json={"payment_mode": "Cash", "amount": "100"},
        )
        assert response.status_code == 422

    async def test_booking_of_other_branch(
        self, client: AsyncClient, setup: AgencySetup, pune_booking: Booking
    ):
        response = await client.post(
            "/api/v1/booking-receipts",
            headers=auth_headers(setup.staff),
            json=_receipt(pune_booking),
        )
        assert response.status_code == 404


class TestReceiptMaintenance:
    async def _create(self, client: AsyncClient, setup: AgencySetup, booking: Booking) -> dict:
        response = await client.post(
            "/api/v1/booking-receipts", headers=auth_headers(setup.staff), json=_receipt(booking)
        )
        return response.json()["data"]

    async def test_list_for_booking(self, client: AsyncClient, setup: AgencySetup, booking: Booking):
        await self._create(client, setup, booking)
        response = await client.get(
            f"/api/v1/booking-receipts/booking/{booking.id}", headers=auth_headers(setup.staff)
        )
        assert len(response.json()["data"]) == 1

    async def test_hidden_from_other_branch(
        self, client: AsyncClient, setup: AgencySetup, booking: Booking
    ):
        receipt = await self._create(client, setup, booking)
        response = await client.get(
            f"/api/v1/booking-receipts/{receipt['id']}", headers=auth_headers(setup.pune_staff)
        )
        assert response.status_code == 404

    async def test_update_recomputes_total(
        self, client: AsyncClient, setup: AgencySetup, booking: Booking
    ):
        receipt = await self._create(client, setup, booking)
        response = await client.put(
            f"/api/v1/booking-receipts/{receipt['id']}",
            headers=auth_headers(setup.staff),
            json={
                "receipt_date": "2025-06-10",
                "payment_mode": "UPI",
                "amount": "20000.00",
                "utr_number": "UTR778812",
                "is_gst": True,
                "igst_percent": "5",
            },
        )
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["receipt_number"] == receipt["receipt_number"]
        assert Decimal(data["igst_amount"]) == Decimal("1000")
        assert Decimal(data["total_amount"]) == Decimal("21000")

    async def test_delete_requires_branch_admin(
        self, client: AsyncClient, setup: AgencySetup, booking: Booking
    ):
        receipt = await self._create(client, setup, booking)
        denied = await client.delete(
            f"/api/v1/booking-receipts/{receipt['id']}", headers=auth_headers(setup.staff)
        )
        allowed = await client.delete(
            f"/api/v1/booking-receipts/{receipt['id']}", headers=auth_headers(setup.branch_admin)
        )
        assert denied.status_code == 403
        assert allowed.status_code == 200


class TestReceiptInvoice:
    async def test_invoice_numbered_once(
        self, client: AsyncClient, setup: AgencySetup, booking: Booking
    ):
        created = await client.post(
            "/api/v1/booking-receipts",
            headers=auth_headers(setup.staff),
            json=_receipt(booking, is_gst=True, cgst_percent="2.5", sgst_percent="2.5"),
        )
        receipt_id = created.json()["data"]["id"]
        expected = f"INV/{financial_year(date.today())}/001"

        with patch.object(pdf_service, "html_to_pdf", return_value=FAKE_PDF) as html_to_pdf:
            first = await client.get(
                f"/api/v1/booking-receipts/{receipt_id}/invoice", headers=auth_headers(setup.staff)
            )
            second = await client.get(
                f"/api/v1/booking-receipts/{receipt_id}/invoice", headers=auth_headers(setup.staff)
            )

        assert first.status_code == 200
        assert first.content == FAKE_PDF
        assert first.headers["content-type"] == "application/pdf"
        filename = expected.replace("/", "-")
        assert f"invoice_{filename}.pdf" in second.headers["content-disposition"]

        html = html_to_pdf.call_args.args[0]
        assert expected in html
        assert "Rahul Deshpande" in html
        assert "10,500.00" in html
        assert "RCPT/2025-26/001" in html

        detail = await client.get(
            f"/api/v1/booking-receipts/{receipt_id}", headers=auth_headers(setup.staff)
        )
        assert detail.json()["data"]["invoice_number"] == expected
        assert detail.json()["data"]["invoice_date"] == date.today().isoformat()
