import logging
from decimal import Decimal
from typing import Optional

from fastapi import APIRouter, Query

from armoire.pricing.dependencies import PricingServiceDep
from armoire.pricing.models import PricingConfigRead, ShippingQuoteRead

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/config", response_model=PricingConfigRead)
async def read_pricing_config(service: PricingServiceDep):
    """Configuration courante de la taxe et de la livraison."""
    return PricingConfigRead(
        gst_rate=service.get_gst_rate(),
        gst_rate_percent=service.get_gst_rate_percent(),
        shipping_cost=service.settings.SHIPPING_COST,
        shipping_threshold=service.get_shipping_threshold(),
    )


@router.get("/shipping", response_model=ShippingQuoteRead)
async def read_shipping_cost(service: PricingServiceDep, subtotal: Optional[Decimal] = Query(None, ge=0)):
    """Frais de port applicables à un sous-total."""
    return ShippingQuoteRead(
        subtotal=subtotal if subtotal is not None else Decimal(0),
        shipping_cost=service.get_shipping_cost(subtotal),
    )
