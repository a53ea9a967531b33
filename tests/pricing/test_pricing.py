from decimal import Decimal

import pytest
from fastapi import status
from httpx import AsyncClient
from pydantic import ValidationError

from armoire.config import settings
from armoire.pricing.config import PricingSettings
from armoire.pricing.service import PricingConfigService

API_PREFIX = settings.API_V1_PREFIX


@pytest.fixture
def pricing_service():
    return PricingConfigService(PricingSettings(GST_RATE=18, SHIPPING_COST=Decimal("100"), SHIPPING_THRESHOLD=Decimal("1000")))


def test_gst_rate_is_a_fraction(pricing_service):
    assert pricing_service.get_gst_rate() == Decimal("0.1800")
    assert pricing_service.get_gst_rate_percent() == 18
    assert isinstance(pricing_service.get_gst_rate_percent(), int)


@pytest.mark.parametrize("rate, expected", [(0, Decimal("0.0000")), (5, Decimal("0.0500")), (100, Decimal("1.0000"))])
def test_gst_rate_from_integer_percent(rate, expected):
    assert PricingConfigService(PricingSettings(GST_RATE=rate)).get_gst_rate() == expected


@pytest.mark.parametrize("rate", ["12.345", "18.5", -1, 101])
def test_gst_rate_must_be_an_integer_percent(rate):
    with pytest.raises(ValidationError):
        PricingSettings(GST_RATE=rate)


@pytest.mark.parametrize("subtotal, expected", [
    (Decimal("999.99"), Decimal("100")),
    (Decimal("1000"), Decimal("0")),
    (Decimal("2500"), Decimal("0")),
    (Decimal("0"), Decimal("100")),
    (None, Decimal("100")),
])
def test_shipping_cost(pricing_service, subtotal, expected):
    assert pricing_service.get_shipping_cost(subtotal) == expected


@pytest.mark.asyncio
async def test_pricing_config_endpoint(test_client: AsyncClient):
    response = await test_client.get(f"{API_PREFIX}/pricing/config")

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert set(data.keys()) == {"gstRate", "gstRatePercent", "shippingCost", "shippingThreshold"}
    assert Decimal(str(data["gstRate"])) == Decimal("0.18")
    assert data["gstRatePercent"] == 18


@pytest.mark.asyncio
async def test_shipping_endpoint(test_client: AsyncClient):
    below = await test_client.get(f"{API_PREFIX}/pricing/shipping", params={"subtotal": "250"})
    above = await test_client.get(f"{API_PREFIX}/pricing/shipping", params={"subtotal": "1500"})
    missing = await test_client.get(f"{API_PREFIX}/pricing/shipping")

    assert Decimal(str(below.json()["shippingCost"])) == Decimal("100")
    assert Decimal(str(above.json()["shippingCost"])) == Decimal("0")
    assert Decimal(str(missing.json()["shippingCost"])) == Decimal("100")
    assert Decimal(str(missing.json()["subtotal"])) == Decimal("0")


@pytest.mark.asyncio
async def test_shipping_endpoint_rejects_negative_subtotal(test_client: AsyncClient):
    response = await test_client.get(f"{API_PREFIX}/pricing/shipping", params={"subtotal": "-5"})
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
