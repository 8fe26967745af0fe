"""API endpoints for Receipts module."""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from voyage.core.auth.dependencies import require_permission
from voyage.core.auth.models import User
from voyage.core.database.session import get_db
from voyage.core.pdf import build_receipt_invoice_context, pdf_service
from voyage.modules.receipts.schemas import ReceiptCreate, ReceiptResponse, ReceiptUpdate
from voyage.modules.receipts.service import ReceiptService
from voyage.shared.schemas.base import ApiResponse

router = APIRouter(prefix="/booking-receipts", tags=["Receipts"])


@router.get("/booking/{booking_id}", response_model=ApiResponse[list[ReceiptResponse]])
async def list_booking_receipts(
    booking_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("receipts.read")),
):
    receipts = await ReceiptService(db).list_booking_receipts(booking_id, current_user)
    return ApiResponse(success=True, data=[ReceiptResponse.model_validate(r) for r in receipts])


@router.get(
    "/group-client-booking/{group_client_booking_id}",
    response_model=ApiResponse[list[ReceiptResponse]],
)
async def list_group_client_receipts(
    group_client_booking_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("receipts.read")),
):
    receipts = await ReceiptService(db).list_group_client_receipts(
        group_client_booking_id, current_user
    )
    return ApiResponse(success=True, data=[ReceiptResponse.model_validate(r) for r in receipts])


@router.post("", response_model=ApiResponse[ReceiptResponse], status_code=status.HTTP_201_CREATED)
async def create_receipt(
    data: ReceiptCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("receipts.write")),
):
    """
    Record a receipt against a booking or a group client booking.

    For GST receipts, tax amounts left out are derived from their percentages;
    the total is the amount plus taxes.
    """
    receipt = await ReceiptService(db).create_receipt(data, current_user)
    return ApiResponse(
        success=True,
        message="Receipt created successfully",
        data=ReceiptResponse.model_validate(receipt),
    )


@router.get("/{receipt_id}", response_model=ApiResponse[ReceiptResponse])
async def get_receipt(
    receipt_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("receipts.read")),
):
    receipt = await ReceiptService(db).get_receipt(receipt_id, current_user)
    return ApiResponse(success=True, data=ReceiptResponse.model_validate(receipt))


@router.put("/{receipt_id}", response_model=ApiResponse[ReceiptResponse])
async def update_receipt(
    receipt_id: int,
    data: ReceiptUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("receipts.write")),
):
    receipt = await ReceiptService(db).update_receipt(receipt_id, data, current_user)
    return ApiResponse(
        success=True,
        message="Receipt updated successfully",
        data=ReceiptResponse.model_validate(receipt),
    )


@router.delete("/{receipt_id}", response_model=ApiResponse[None])
async def delete_receipt(
    receipt_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("receipts.delete")),
):
    await ReceiptService(db).delete_receipt(receipt_id, current_user)
    return ApiResponse(success=True, message="Receipt deleted successfully", data=None)


@router.get("/{receipt_id}/invoice")
async def download_receipt_invoice(
    receipt_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("receipts.read")),
):
    """Download the tax invoice PDF of a receipt."""
    receipt = await ReceiptService(db).prepare_invoice(receipt_id, current_user)
    context = build_receipt_invoice_context(receipt)
    pdf_bytes = pdf_service.generate_tax_invoice_pdf(context)
    filename = receipt.invoice_number.replace("/", "-")
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="invoice_{filename}.pdf"'},
    )
