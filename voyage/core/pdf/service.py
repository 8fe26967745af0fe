"""PDF generation (tax invoices) from HTML templates."""

import logging
from datetime import date
from decimal import Decimal
from pathlib import Path

from jinja2 import Environment, FileSystemLoader
from num2words import num2words

from voyage.core.config import settings
from voyage.core.exceptions import PdfGenerationUnavailableError
from voyage.shared.utils.money import percent_of, round_money

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).resolve().parent.parent.parent / "templates" / "pdf"


def amount_to_words(amount: Decimal) -> str:
    """Convert amount to Indian-English words (e.g. 118000 -> 'Rupees One Lakh, Eighteen Thousand Only')."""
    amount = round_money(amount)
    rupees = int(amount)
    paise = int((amount - rupees) * 100)
    words = f"Rupees {num2words(rupees, lang='en_IN').title()}"
    if paise:
        words += f" and {num2words(paise, lang='en_IN').title()} Paise"
    return f"{words} Only"


def _format_date(value: date | None) -> str:
    return value.strftime("%d/%m/%Y") if value else ""


def _tax_lines(
    amount: Decimal,
    cgst: tuple[Decimal | None, Decimal | None],
    sgst: tuple[Decimal | None, Decimal | None],
    igst: tuple[Decimal | None, Decimal | None],
) -> list[dict]:
    """Non-zero tax lines as (label, rate, amount). Missing amounts are derived from the rate."""
    lines = []
    for label, (rate, tax_amount) in (("CGST", cgst), ("SGST", sgst), ("IGST", igst)):
        if tax_amount is None and rate:
            tax_amount = percent_of(amount, rate)
        if tax_amount:
            lines.append({"label": label, "rate": rate or Decimal("0"), "amount": tax_amount})
    return lines


class PDFService:
    """Generate PDF documents from Jinja2 templates and WeasyPrint."""

    def __init__(self) -> None:
        self._env = Environment(
            loader=FileSystemLoader(str(TEMPLATE_DIR)),
            autoescape=True,
        )
        self._env.filters["money"] = lambda v: f"{Decimal(v):,.2f}"

    def render_tax_invoice_html(self, context: dict) -> str:
        template = self._env.get_template("tax_invoice.html")
        return template.render(**context)

    def html_to_pdf(self, html_content: str) -> bytes:
        """Lay out rendered HTML as PDF with WeasyPrint."""
        try:
            from weasyprint import HTML
        except (OSError, ImportError) as e:
            raise PdfGenerationUnavailableError(
                f"PDF generation unavailable (WeasyPrint/system libs). {e!s}"
            ) from e
        try:
            return HTML(string=html_content).write_pdf()
        except Exception as e:
            raise PdfGenerationUnavailableError(str(e)) from e

    def generate_tax_invoice_pdf(self, context: dict) -> bytes:
        """Render tax invoice template with context and return PDF bytes."""
        pdf = self.html_to_pdf(self.render_tax_invoice_html(context))
        logger.info("Rendered tax invoice %s", context["invoice"]["number"])
        return pdf


def _invoice_context(
    *,
    number: str,
    invoice_date: date | None,
    issuer: dict,
    bill_to: dict,
    description: str,
    amount: Decimal,
    tax_lines: list[dict],
    total: Decimal | None = None,
) -> dict:
    amount = round_money(amount)
    tax_total = sum((line["amount"] for line in tax_lines), Decimal("0"))
    total = round_money(total if total is not None else amount + tax_total)
    return {
        "invoice": {
            "number": number,
            "date": _format_date(invoice_date),
            "lines": [
                {
                    "sr_no": 1,
                    "description": description,
                    "sac_code": settings.invoice_sac_code,
                    "amount": amount,
                }
            ],
            "amount_before_tax": amount,
            "tax_lines": tax_lines,
            "total": total,
            "amount_in_words": amount_to_words(total),
        },
        "issuer": issuer,
        "bill_to": bill_to,
    }


def build_subscription_invoice_context(subscription) -> dict:
    """Tax invoice from the platform to an agency for one subscription period.

    CGST and SGST apply when the agency is in the platform's state, IGST otherwise.
    """
    agency = subscription.agency
    package = subscription.package
    cost = round_money(subscription.cost)

    if agency.state.strip().lower() == settings.platform_state.strip().lower():
        tax_lines = _tax_lines(
            cost, (settings.cgst_rate, None), (settings.sgst_rate, None), (None, None)
        )
    else:
        tax_lines = _tax_lines(cost, (None, None), (None, None), (settings.igst_rate, None))

    return _invoice_context(
        number=subscription.invoice_number,
        invoice_date=subscription.invoice_date,
        issuer=settings.platform_info,
        bill_to={
            "name": agency.business_name,
            "address_lines": [line for line in (agency.address_line1, agency.address_line2) if line],
            "city": agency.city,
            "pincode": agency.pincode,
            "gstin": agency.gstin or "",
        },
        description=(
            f"{package.package_name} subscription "
            f"({_format_date(subscription.start_date)} to {_format_date(subscription.end_date)})"
        ),
        amount=cost,
        tax_lines=tax_lines,
    )


def build_receipt_invoice_context(receipt) -> dict:
    """Tax invoice from an agency to its client for one booking receipt."""
    agency = receipt.agency
    client = receipt.client

    bill_to = {"name": "", "address_lines": [], "city": "", "pincode": "", "gstin": ""}
    if client is not None:
        bill_to = {
            "name": client.client_name,
            "address_lines": [line for line in (client.address1, client.address2) if line],
            "city": client.city.city_name if client.city else "",
            "pincode": client.pincode or "",
            "gstin": client.gstin or "",
        }

    tax_lines = _tax_lines(
        receipt.amount,
        (receipt.cgst_percent, receipt.cgst_amount),
        (receipt.sgst_percent, receipt.sgst_amount),
        (receipt.igst_percent, receipt.igst_amount),
    )

    return _invoice_context(
        number=receipt.invoice_number,
        invoice_date=receipt.invoice_date,
        issuer={
            "name": agency.business_name,
            "address_lines": [line for line in (agency.address_line1, agency.address_line2) if line],
            "state": agency.state,
            "gstin": agency.gstin or "",
            "email": agency.contact_person_email,
        },
        bill_to=bill_to,
        description=receipt.description or f"Tour services against receipt {receipt.receipt_number}",
        amount=receipt.amount,
        tax_lines=tax_lines,
        total=receipt.total_amount,
    )


pdf_service = PDFService()
