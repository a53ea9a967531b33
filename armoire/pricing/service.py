import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from armoire.pricing.config import PricingSettings

logger = logging.getLogger(__name__)

GST_RATE_QUANTUM = Decimal("0.0001")


class PricingConfigService:
    """Lecture des taux de taxe et des règles de frais de port."""

    def __init__(self, pricing_settings: PricingSettings):
        self.settings = pricing_settings

    def get_gst_rate(self) -> Decimal:
        """Taux de GST en fraction (18 -> 0.1800), le pourcentage étant entier."""
        return (Decimal(self.settings.GST_RATE) / Decimal(100)).quantize(GST_RATE_QUANTUM, rounding=ROUND_HALF_UP)

    def get_gst_rate_percent(self) -> int:
        return self.settings.GST_RATE

    def get_shipping_threshold(self) -> Decimal:
        return self.settings.SHIPPING_THRESHOLD

    def get_shipping_cost(self, subtotal: Optional[Decimal]) -> Decimal:
        """
        Frais de port pour un sous-total donné.

        Gratuits à partir du seuil; un sous-total absent est traité comme 0.
        """
        if subtotal is None:
            subtotal = Decimal(0)
        if subtotal >= self.settings.SHIPPING_THRESHOLD:
            logger.debug(f"[PricingConfigService] Livraison offerte pour un sous-total de {subtotal}")
            return Decimal(0)
        return self.settings.SHIPPING_COST
