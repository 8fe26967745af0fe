from datetime import date
from decimal import Decimal
from types import SimpleNamespace

from voyage.core.pdf import (
    amount_to_words,
    build_receipt_invoice_context,
    build_subscription_invoice_context,
    pdf_service,
)


def _receipt(**overrides):
    agency = SimpleNamespace(
        business_name="Sahyadri Holidays",
        address_line1="12 FC Road",
        address_line2=None,
        state="Maharashtra",
        gstin="27AAPFU0939F1ZV",
        contact_person_email="owner@sahyadri.in",
    )
    client = SimpleNamespace(
        client_name="Rahul Deshpande",
        address1="Flat 4, Shanti Niwas",
        address2="Kothrud",
        city=SimpleNamespace(city_name="Pune"),
        pincode="411038",
        gstin=None,
    )
    values = {
        "agency": agency,
        "client": client,
        "invoice_number": "INV/2025-26/001",
        "invoice_date": date(2025, 7, 15),
        "receipt_number": "RCPT/2025-26/004",
        "description": None,
        "amount": Decimal("10000.00"),
        "cgst_percent": Decimal("2.5"),
        "cgst_amount": None,
        "sgst_percent": Decimal("2.5"),
        "sgst_amount": Decimal("250.00"),
        "igst_percent": None,
        "igst_amount": None,
        "total_amount": Decimal("10500.00"),
    }
    values.update(overrides)
    return SimpleNamespace(**values)


class TestAmountToWords:
    def test_whole_rupees(self):
        words = amount_to_words(Decimal("118000"))
        assert words.startswith("Rupees ")
        assert "Lakh" in words
        assert words.endswith("Only")

    def test_paise(self):
        words = amount_to_words(Decimal("10.50"))
        assert "Fifty Paise" in words


class TestReceiptInvoiceContext:
    def test_taxes_derived_from_rate_when_amount_missing(self):
        context = build_receipt_invoice_context(_receipt())

        lines = {line["label"]: line["amount"] for line in context["invoice"]["tax_lines"]}
        assert lines == {"CGST": Decimal("250.00"), "SGST": Decimal("250.00")}
        assert context["invoice"]["total"] == Decimal("10500.00")
        assert context["invoice"]["date"] == "15/07/2025"

    def test_default_description_mentions_receipt(self):
        context = build_receipt_invoice_context(_receipt())
        assert context["invoice"]["lines"][0]["description"].endswith("RCPT/2025-26/004")

    def test_bill_to_is_the_client(self):
        context = build_receipt_invoice_context(_receipt())
        assert context["bill_to"]["name"] == "Rahul Deshpande"
        assert context["bill_to"]["city"] == "Pune"
        assert context["issuer"]["gstin"] == "27AAPFU0939F1ZV"

    def test_blank_bill_to_without_client(self):
        context = build_receipt_invoice_context(_receipt(client=None))
        assert context["bill_to"]["name"] == ""

    def test_rendered_html(self):
        html = pdf_service.render_tax_invoice_html(build_receipt_invoice_context(_receipt()))
        assert "TAX INVOICE" in html
        assert "INV/2025-26/001" in html
        assert "10,500.00" in html
        assert "CGST @ 2.5%" in html


def _subscription(state: str = "Maharashtra"):
    agency = SimpleNamespace(
        business_name="Sahyadri Holidays",
        address_line1="12 FC Road",
        address_line2=None,
        city="Mumbai",
        pincode="400001",
        state=state,
        gstin="27AAPFU0939F1ZV",
    )
    return SimpleNamespace(
        agency=agency,
        package=SimpleNamespace(package_name="Standard"),
        cost=Decimal("12000.00"),
        start_date=date(2025, 4, 1),
        end_date=date(2026, 4, 1),
        invoice_number="SUB/2025-26/001",
        invoice_date=date(2025, 4, 1),
    )


class TestSubscriptionInvoiceContext:
    def test_home_state_pays_cgst_and_sgst(self):
        context = build_subscription_invoice_context(_subscription())
        labels = [line["label"] for line in context["invoice"]["tax_lines"]]
        assert labels == ["CGST", "SGST"]

    def test_other_state_pays_igst(self):
        context = build_subscription_invoice_context(_subscription(state="Goa"))
        labels = [line["label"] for line in context["invoice"]["tax_lines"]]
        assert labels == ["IGST"]

    def test_rendered_html(self):
        html = pdf_service.render_tax_invoice_html(
            build_subscription_invoice_context(_subscription())
        )
        assert "SUB/2025-26/001" in html
        assert "Standard subscription (01/04/2025 to 01/04/2026)" in html
        assert "12,000.00" in html
        assert "14,160.00" in html
