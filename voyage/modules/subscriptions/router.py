"""API endpoints for Subscriptions module."""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from voyage.core.auth.dependencies import require_permission
from voyage.core.auth.models import User
from voyage.core.database.session import get_db
from voyage.core.exceptions import AuthorizationError
from voyage.core.pdf import build_subscription_invoice_context, pdf_service
from voyage.modules.subscriptions.schemas import SubscriptionRenew, SubscriptionResponse
from voyage.modules.subscriptions.service import SubscriptionService
from voyage.shared.schemas.base import ApiResponse

router = APIRouter(prefix="/subscriptions", tags=["Subscriptions"])


@router.post(
    "",
    response_model=ApiResponse[SubscriptionResponse],
    status_code=status.HTTP_201_CREATED,
)
async def renew_subscription(
    data: SubscriptionRenew,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("subscriptions.write", agency_scoped=False)),
):
    """Renew an agency subscription. Super admin only."""
    service = SubscriptionService(db)
    subscription = await service.renew(data.agency_id, data.package_id, current_user.id)
    return ApiResponse(
        success=True,
        message="Subscription renewed successfully",
        data=SubscriptionResponse.model_validate(subscription),
    )


@router.get(
    "/agency/{agency_id}",
    response_model=ApiResponse[list[SubscriptionResponse]],
)
async def list_agency_subscriptions(
    agency_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("subscriptions.read", agency_scoped=False)),
):
    """Subscription history of an agency."""
    if not current_user.is_super_admin and current_user.agency_id != agency_id:
        raise AuthorizationError("Not authorized to view this agency")
    subscriptions = await SubscriptionService(db).list_for_agency(agency_id)
    return ApiResponse(
        success=True,
        data=[SubscriptionResponse.model_validate(s) for s in subscriptions],
    )


@router.get("/{subscription_id}/invoice")
async def download_subscription_invoice(
    subscription_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("subscriptions.read", agency_scoped=False)),
):
    """Download the tax invoice PDF of a subscription."""
    subscription = await SubscriptionService(db).prepare_invoice(subscription_id, current_user)
    context = build_subscription_invoice_context(subscription)
    pdf_bytes = pdf_service.generate_tax_invoice_pdf(context)
    filename = subscription.invoice_number.replace("/", "-")
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="invoice_{filename}.pdf"'},
    )
