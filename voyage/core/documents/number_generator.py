import logging
from datetime import date
from enum import StrEnum

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from voyage.core.documents.models import DocumentSequence
from voyage.shared.utils.dates import financial_year

logger = logging.getLogger(__name__)

PLATFORM_SCOPE = 0


class DocumentSeries(StrEnum):
    """Independent numbering series."""

    BOOKING = "BOOKING"
    GROUP_BOOKING = "GROUP_BOOKING"
    HOTEL_HRV = "HRV"
    VEHICLE_HRV = "VHRV"
    RECEIPT = "RCPT"
    RECEIPT_INVOICE = "INV"
    SUBSCRIPTION_INVOICE = "SUB"


# Printed prefix per series; bookings carry the bare financial year
SERIES_PREFIXES: dict[DocumentSeries, str | None] = {
    DocumentSeries.BOOKING: None,
    DocumentSeries.GROUP_BOOKING: None,
    DocumentSeries.HOTEL_HRV: "HRV",
    DocumentSeries.VEHICLE_HRV: "VHRV",
    DocumentSeries.RECEIPT: "RCPT",
    DocumentSeries.RECEIPT_INVOICE: "INV",
    DocumentSeries.SUBSCRIPTION_INVOICE: "SUB",
}


def format_document_number(series: DocumentSeries, period: str, number: int) -> str:
    """Format a number, e.g. ``2025-26/001`` or ``HRV/2025-26/014``."""
    body = f"{period}/{number:03d}"
    prefix = SERIES_PREFIXES[series]
    return f"{prefix}/{body}" if prefix else body


class DocumentNumberGenerator:
    """
    Generates sequential document numbers per agency, series and financial year.

    Examples:
        2025-26/001          (booking, group booking)
        HRV/2025-26/001      (hotel voucher)
        VHRV/2025-26/007     (vehicle voucher)
        RCPT/2025-26/042     (booking receipt)
        INV/2025-26/003      (receipt tax invoice)
        SUB/2025-26/010      (subscription invoice, platform scope)

    The counter row is locked with SELECT FOR UPDATE and incremented inside the
    caller's transaction, so the number is only consumed if that transaction
    commits. Uniqueness is guaranteed, gap-free numbering is not.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def generate(
        self,
        series: DocumentSeries,
        agency_id: int = PLATFORM_SCOPE,
        on: date | None = None,
    ) -> str:
        """Allocate the next number of ``series`` for ``agency_id``."""
        period = financial_year(on or date.today())

        stmt = (
            select(DocumentSequence)
            .where(
                DocumentSequence.agency_id == agency_id,
                DocumentSequence.series == series.value,
                DocumentSequence.period == period,
            )
            .with_for_update()
        )
        result = await self.session.execute(stmt)
        sequence = result.scalar_one_or_none()

        if sequence is None:
            # A concurrent first allocation may insert the same key; the savepoint
            # keeps the outer transaction usable and we lock the winner's row instead.
            try:
                async with self.session.begin_nested():
                    self.session.add(
                        DocumentSequence(
                            agency_id=agency_id,
                            series=series.value,
                            period=period,
                            last_number=0,
                        )
                    )
            except IntegrityError:
                logger.info(
                    "Sequence %s/%s for agency %s created concurrently", series, period, agency_id
                )

            result = await self.session.execute(stmt)
            sequence = result.scalar_one()

        sequence.last_number += 1
        await self.session.flush()

        number = format_document_number(series, period, sequence.last_number)
        logger.debug("Allocated %s for agency %s", number, agency_id)
        return number


async def get_document_number(
    session: AsyncSession,
    series: DocumentSeries,
    agency_id: int = PLATFORM_SCOPE,
    on: date | None = None,
) -> str:
    """Convenience function to generate a document number."""
    generator = DocumentNumberGenerator(session)
    return await generator.generate(series, agency_id, on)
