from decimal import Decimal

from pydantic import Field
from pydantic_settings import BaseSettings


class PricingSettings(BaseSettings):
    """Paramètres de taxe et de livraison (préfixe PRICING_)."""
    GST_RATE: int = Field(default=18, ge=0, le=100)
    SHIPPING_COST: Decimal = Decimal("100")
    SHIPPING_THRESHOLD: Decimal = Decimal("1000")

    class Config:
        env_prefix = "PRICING_"
        env_file = ".env"
        extra = "ignore"

settings = PricingSettings()
