from voyage.core.documents.models import DocumentSequence
from voyage.core.documents.number_generator import (
    PLATFORM_SCOPE,
    DocumentNumberGenerator,
    DocumentSeries,
    format_document_number,
    get_document_number,
)

__all__ = [
    "PLATFORM_SCOPE",
    "DocumentNumberGenerator",
    "DocumentSequence",
    "DocumentSeries",
    "format_document_number",
    "get_document_number",
]
