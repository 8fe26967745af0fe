from voyage.core.pdf.service import (
    amount_to_words,
    build_receipt_invoice_context,
    build_subscription_invoice_context,
    pdf_service,
)

__all__ = [
    "pdf_service",
    "amount_to_words",
    "build_receipt_invoice_context",
    "build_subscription_invoice_context",
]
