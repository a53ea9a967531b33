"""
Cache de lecture du catalogue (read-through).

Les valeurs sont stockées en JSON avec une durée de vie; aucune invalidation
explicite n'est faite, les entrées expirent d'elles-mêmes.
"""
import json
import logging
import uuid
from abc import ABC, abstractmethod
from typing import Any, Optional

from redis.asyncio import Redis
from redis.exceptions import RedisError

logger = logging.getLogger(__name__)


# Clés normalisées pour éviter les fautes de frappe
def design_categories_key() -> str:
    return "design:categories"


def design_category_key(slug: str) -> str:
    return f"design:category:{slug}"


def design_key(design_id: uuid.UUID) -> str:
    return f"design:{design_id}"


class DesignCache(ABC):

    @abstractmethod
    async def get(self, key: str) -> Optional[Any]:
        """Retourne la valeur décodée, ou None si absente."""
        raise NotImplementedError

    @abstractmethod
    async def set(self, key: str, value: Any) -> None:
        raise NotImplementedError


class RedisDesignCache(DesignCache):
    """Cache Redis. Une erreur Redis est journalisée et traitée comme un échec de cache."""

    def __init__(self, client: Redis, ttl: int):
        self.client = client
        self.ttl = ttl

    async def get(self, key: str) -> Optional[Any]:
        try:
            cached = await self.client.get(key)
        except RedisError as e:
            logger.warning(f"[DesignCache] Lecture Redis impossible pour {key}: {e}")
            return None
        if cached is None:
            return None
        if isinstance(cached, bytes):
            cached = cached.decode()
        return json.loads(cached)

    async def set(self, key: str, value: Any) -> None:
        try:
            await self.client.set(key, json.dumps(value), ex=self.ttl)
        except RedisError as e:
            logger.warning(f"[DesignCache] Écriture Redis impossible pour {key}: {e}")


class NoOpDesignCache(DesignCache):
    """Utilisé quand REDIS_URL n'est pas configuré."""

    async def get(self, key: str) -> Optional[Any]:
        return None

    async def set(self, key: str, value: Any) -> None:
        return None
