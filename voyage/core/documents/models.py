from sqlalchemy import BigInteger, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from voyage.core.database.base import Base


class DocumentSequence(Base):
    """Stores the last issued number per agency, document series and financial year."""

    __tablename__ = "document_sequences"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    # 0 for platform-wide series (subscription invoices)
    agency_id: Mapped[int] = mapped_column(BigInteger, nullable=False)
    series: Mapped[str] = mapped_column(String(30), nullable=False)
    period: Mapped[str] = mapped_column(String(10), nullable=False)  # e.g. 2025-26
    last_number: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    __table_args__ = (
        UniqueConstraint(
            "agency_id", "series", "period", name="uq_document_sequence_agency_series_period"
        ),
    )
