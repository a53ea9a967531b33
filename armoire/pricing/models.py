from decimal import Decimal

from armoire.core.schemas import ApiModel


class PricingConfigRead(ApiModel):
    gst_rate: Decimal
    gst_rate_percent: int
    shipping_cost: Decimal
    shipping_threshold: Decimal


class ShippingQuoteRead(ApiModel):
    subtotal: Decimal
    shipping_cost: Decimal
