import json
from decimal import Decimal

import httpx
import pytest

from courtdesk.core.exceptions import PaymentLinkError
from courtdesk.schemas.payments import PaymentItem
from courtdesk.services.payment_client import PaymentClient, cart_items


def test_cart_items_adds_surcharge_line():
    items = cart_items(
        [
            PaymentItem(title="Gatorade", unit_price=Decimal("2500"), quantity=2),
            PaymentItem(title="Agua", unit_price=Decimal("1500"), quantity=1),
        ],
        surcharge_percentage=Decimal("10"),
    )

    assert len(items) == 3
    assert items[-1].title == "Recargo por Servicio (Comisión)"
    assert items[-1].unit_price == Decimal("650.00")
    assert items[-1].quantity == 1


def test_cart_items_without_surcharge():
    items = cart_items([PaymentItem(title="Cancha 1", unit_price=Decimal("20000"))])

    assert [item.title for item in items] == ["Cancha 1"]


@pytest.mark.asyncio
async def test_create_payment_link():
    requests = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(201, json={"id": "pref-1", "init_point": "https://mp.example/checkout/pref-1"})

    client = PaymentClient(access_token="TEST-TOKEN", transport=httpx.MockTransport(handler))

    url = await client.create_payment_link([PaymentItem(title="Cancha 1", unit_price=Decimal("20000"))])

    assert url == "https://mp.example/checkout/pref-1"
    assert requests[0].url.path == "/checkout/preferences"
    assert requests[0].headers["Authorization"] == "Bearer TEST-TOKEN"
    body = json.loads(requests[0].content)
    assert body["items"] == [{"title": "Cancha 1", "unit_price": 20000.0, "quantity": 1}]
    assert body["auto_return"] == "approved"
    assert set(body["back_urls"]) == {"success", "failure", "pending"}


@pytest.mark.asyncio
async def test_retries_then_succeeds():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        if len(calls) < 2:
            return httpx.Response(503, json={"message": "unavailable"})
        return httpx.Response(201, json={"init_point": "https://mp.example/ok"})

    client = PaymentClient(access_token="T", transport=httpx.MockTransport(handler), backoff_seconds=0)

    assert await client.create_payment_link([PaymentItem(title="x", unit_price=Decimal("1"))]) == "https://mp.example/ok"
    assert len(calls) == 2


@pytest.mark.asyncio
async def test_provider_failure_raises_payment_link_error():
    client = PaymentClient(
        access_token="T",
        transport=httpx.MockTransport(lambda request: httpx.Response(500)),
        backoff_seconds=0,
    )

    with pytest.raises(PaymentLinkError):
        await client.create_payment_link([PaymentItem(title="x", unit_price=Decimal("1"))])


@pytest.mark.asyncio
async def test_missing_init_point_raises():
    client = PaymentClient(
        access_token="T",
        transport=httpx.MockTransport(lambda request: httpx.Response(201, json={"id": "x"})),
    )

    with pytest.raises(PaymentLinkError):
        await client.create_payment_link([PaymentItem(title="x", unit_price=Decimal("1"))])


@pytest.mark.asyncio
async def test_missing_token_raises(monkeypatch):
    from courtdesk.core.config import settings

    monkeypatch.setattr(settings, "MERCADOPAGO_ACCESS_TOKEN", None)

    with pytest.raises(PaymentLinkError):
        await PaymentClient().create_payment_link([PaymentItem(title="x", unit_price=Decimal("1"))])
