from typing import Annotated

from fastapi import Depends

from armoire.pricing.config import settings
from armoire.pricing.service import PricingConfigService


def get_pricing_service() -> PricingConfigService:
    return PricingConfigService(settings)

PricingServiceDep = Annotated[PricingConfigService, Depends(get_pricing_service)]
