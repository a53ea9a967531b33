import logging
from functools import lru_cache
from typing import Annotated

from fastapi import Depends
from redis import asyncio as aioredis

from armoire.config import settings
from armoire.designs.cache import DesignCache, NoOpDesignCache, RedisDesignCache
from armoire.designs.repositories import SQLAlchemyDesignRepository
from armoire.designs.service import DesignService
from armoire.users.dependencies import DbSessionDep

logger = logging.getLogger(__name__)


@lru_cache
def get_redis_client() -> aioredis.Redis:
    """Client Redis partagé (pool de connexions géré par redis-py)."""
    logger.info("Initialisation du client Redis pour le cache du catalogue")
    return aioredis.from_url(settings.REDIS_URL, decode_responses=True)


def get_design_cache() -> DesignCache:
    if not settings.REDIS_URL:
        return NoOpDesignCache()
    return RedisDesignCache(get_redis_client(), ttl=settings.DESIGN_CACHE_TTL)

DesignCacheDep = Annotated[DesignCache, Depends(get_design_cache)]


def get_design_service(db: DbSessionDep, cache: DesignCacheDep) -> DesignService:
    return DesignService(
        repository=SQLAlchemyDesignRepository(db),
        cache=cache,
        max_page_size=settings.MAX_PAGE_SIZE,
    )

DesignServiceDep = Annotated[DesignService, Depends(get_design_service)]
