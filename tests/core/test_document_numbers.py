from datetime import date

from sqlalchemy.ext.asyncio import AsyncSession

from voyage.core.documents import (
    DocumentNumberGenerator,
    DocumentSeries,
    format_document_number,
    get_document_number,
)
from voyage.shared.utils.dates import financial_year


class TestFinancialYear:
    def test_april_starts_new_year(self):
        assert financial_year(date(2025, 4, 1)) == "2025-26"

    def test_march_belongs_to_previous_year(self):
        assert financial_year(date(2026, 3, 31)) == "2025-26"

    def test_century_rollover(self):
        assert financial_year(date(2099, 12, 1)) == "2099-00"


class TestFormatDocumentNumber:
    def test_booking_has_no_prefix(self):
        assert format_document_number(DocumentSeries.BOOKING, "2025-26", 1) == "2025-26/001"

    def test_voucher_prefix(self):
        assert format_document_number(DocumentSeries.HOTEL_HRV, "2025-26", 14) == "HRV/2025-26/014"

    def test_wide_numbers_are_not_truncated(self):
        assert format_document_number(DocumentSeries.RECEIPT, "2025-26", 1234) == "RCPT/2025-26/1234"


class TestDocumentNumberGenerator:
    """Tests for document number generator."""

    async def test_generate_sequential_numbers(self, db_session: AsyncSession):
        generator = DocumentNumberGenerator(db_session)
        on = date(2025, 6, 1)

        first = await generator.generate(DocumentSeries.BOOKING, 1, on=on)
        second = await generator.generate(DocumentSeries.BOOKING, 1, on=on)

        assert first == "2025-26/001"
        assert second == "2025-26/002"

    async def test_series_are_independent(self, db_session: AsyncSession):
        on = date(2025, 6, 1)
        booking = await get_document_number(db_session, DocumentSeries.BOOKING, 1, on=on)
        voucher = await get_document_number(db_session, DocumentSeries.VEHICLE_HRV, 1, on=on)
        receipt = await get_document_number(db_session, DocumentSeries.RECEIPT, 1, on=on)

        assert booking == "2025-26/001"
        assert voucher == "VHRV/2025-26/001"
        assert receipt == "RCPT/2025-26/001"

    async def test_agencies_are_independent(self, db_session: AsyncSession):
        on = date(2025, 6, 1)
        await get_document_number(db_session, DocumentSeries.RECEIPT, 1, on=on)
        other = await get_document_number(db_session, DocumentSeries.RECEIPT, 2, on=on)

        assert other == "RCPT/2025-26/001"

    async def test_new_financial_year_restarts_numbering(self, db_session: AsyncSession):
        await get_document_number(db_session, DocumentSeries.BOOKING, 1, on=date(2026, 3, 31))
        number = await get_document_number(db_session, DocumentSeries.BOOKING, 1, on=date(2026, 4, 1))

        assert number == "2026-27/001"

    async def test_platform_scope_for_subscription_invoices(self, db_session: AsyncSession):
        number = await get_document_number(
            db_session, DocumentSeries.SUBSCRIPTION_INVOICE, on=date(2025, 10, 1)
        )
        assert number == "SUB/2025-26/001"
