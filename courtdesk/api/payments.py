"""Payment link endpoints."""
from fastapi import APIRouter, HTTPException

from courtdesk.core.exceptions import PaymentLinkError
from courtdesk.schemas.payments import PaymentLink, PaymentLinkRequest
from courtdesk.services.payment_client import cart_items, payment_client

router = APIRouter(prefix="/payments", tags=["payments"])


@router.post("/link", response_model=PaymentLink, status_code=201)
async def create_payment_link(request: PaymentLinkRequest):
    """
    Create a Mercado Pago checkout link for a cart or a booking.

    A surcharge percentage adds one commission line on top of the items.

    Args:
        request: Items to charge and optional surcharge

    Returns:
        Checkout URL to show as a QR code
    """
    try:
        url = await payment_client.create_payment_link(
            cart_items(request.items, request.surcharge_percentage)
        )
    except PaymentLinkError as e:
        raise HTTPException(status_code=502, detail=str(e))
    return PaymentLink(url=url)
