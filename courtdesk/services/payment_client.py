"""Mercado Pago client.

Creates checkout preferences and hands back the hosted payment URL
(``init_point``) that the front desk renders as a QR code. Nothing is
stored locally: a failed call leaves no trace besides the log.
"""
import asyncio
import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, Iterable, List, Optional

import httpx

from courtdesk.core.config import settings
from courtdesk.core.constants import SURCHARGE_ITEM_TITLE
from courtdesk.core.exceptions import PaymentLinkError
from courtdesk.schemas.payments import PaymentItem

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")


def cart_items(items: Iterable[PaymentItem], surcharge_percentage=0) -> List[PaymentItem]:
    """Cart lines plus, when a surcharge applies, one extra commission line."""
    items = list(items)
    percentage = Decimal(str(surcharge_percentage or 0))
    if percentage > 0:
        base = sum((item.unit_price * item.quantity for item in items), Decimal("0"))
        surcharge = (base * percentage / 100).quantize(CENT, rounding=ROUND_HALF_UP)
        if surcharge > 0:
            items.append(PaymentItem(title=SURCHARGE_ITEM_TITLE, unit_price=surcharge, quantity=1))
    return items


class PaymentClient:
    """Client for the Mercado Pago checkout preferences API."""

    def __init__(
        self,
        access_token: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        backoff_seconds: float = 1.0,
    ):
        self.api_base_url = settings.MERCADOPAGO_API_BASE_URL
        self.access_token = access_token
        self.timeout = settings.REQUEST_TIMEOUT_SECONDS
        self.max_retries = settings.MAX_RETRIES
        self.backoff_seconds = backoff_seconds
        self._transport = transport

    @property
    def token(self) -> Optional[str]:
        return self.access_token or settings.MERCADOPAGO_ACCESS_TOKEN

    async def _make_request(self, url: str, json_data: Dict[str, Any]) -> Dict[str, Any]:
        """
        POST with retry and exponential backoff.

        Args:
            url: Request URL
            json_data: JSON body

        Returns:
            Response JSON data

        Raises:
            httpx.HTTPError: If the request still fails after the last retry
        """
        headers = {"Authorization": f"Bearer {self.token}"}

        async with httpx.AsyncClient(transport=self._transport, timeout=self.timeout) as client:
            for attempt in range(self.max_retries):
                try:
                    logger.info(f"POST {url} (attempt {attempt + 1}/{self.max_retries})")
                    response = await client.post(url, json=json_data, headers=headers)
                    response.raise_for_status()
                    return response.json()

                except httpx.HTTPError as e:
                    logger.warning(f"Request failed (attempt {attempt + 1}/{self.max_retries}): {e}")

                    if attempt == self.max_retries - 1:
                        raise

                    await asyncio.sleep(self.backoff_seconds * 2 ** attempt)

            raise httpx.HTTPError("Max retries exceeded")

    async def create_payment_link(self, items: Iterable[PaymentItem]) -> str:
        """
        Create a checkout preference for the given lines.

        Args:
            items: Lines to charge

        Returns:
            The hosted checkout URL

        Raises:
            PaymentLinkError: If the provider is not configured or the call fails
        """
        if not self.token:
            raise PaymentLinkError("MERCADOPAGO_ACCESS_TOKEN is not configured")

        body = {
            "items": [
                {"title": item.title, "unit_price": float(item.unit_price), "quantity": item.quantity}
                for item in items
            ],
            "back_urls": {
                "success": settings.PAYMENT_SUCCESS_URL,
                "failure": settings.PAYMENT_FAILURE_URL,
                "pending": settings.PAYMENT_PENDING_URL,
            },
            "auto_return": "approved",
        }

        try:
            data = await self._make_request(f"{self.api_base_url}/checkout/preferences", body)
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Failed to create payment preference: {e}", exc_info=True)
            raise PaymentLinkError("Could not create the payment link") from e

        url = data.get("init_point")
        if not url:
            logger.error(f"Payment preference response has no init_point: {data}")
            raise PaymentLinkError("Payment provider returned no checkout URL")

        logger.info(f"Created payment preference {data.get('id')}")
        return url


# Singleton instance
payment_client = PaymentClient()
