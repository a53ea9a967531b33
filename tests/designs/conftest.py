import json
from datetime import timedelta
from decimal import Decimal

import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession

from armoire.core.utils import utcnow
from armoire.designs.models import Design, DesignCategory


@pytest_asyncio.fixture
async def catalog(db_session: AsyncSession) -> dict:
    """
    Petit catalogue: deux catégories actives, une inactive, et des designs
    aux dates, popularités et restrictions de produit différentes.
    """
    now = utcnow()
    flowers = DesignCategory(name="Fleurs", slug="fleurs", display_order=2)
    animals = DesignCategory(name="Animaux", slug="animaux", display_order=1)
    hidden = DesignCategory(name="Archives", slug="archives", display_order=0, is_active=False)
    db_session.add_all([flowers, animals, hidden])
    await db_session.flush()

    designs = {
        "rose": Design(
            category_id=flowers.id, name="Rose rouge", slug="rose-rouge",
            design_image_url="https://cdn.test/rose.png", tags="fleur, rouge, amour",
            allowed_product_types=json.dumps(["TSHIRT", "MUG"]), download_count=50,
            price=Decimal("4.99"), is_premium=True, created_at=now - timedelta(days=3),
        ),
        "tulipe": Design(
            category_id=flowers.id, name="Tulipe", slug="tulipe",
            design_image_url="https://cdn.test/tulipe.png", tags="fleur,printemps",
            allowed_product_types=None, download_count=10,
            price=Decimal("0"), created_at=now - timedelta(days=1),
        ),
        "chat": Design(
            category_id=animals.id, name="Chat roux", slug="chat-roux",
            design_image_url="https://cdn.test/chat.png", tags="chat, ROUX",
            allowed_product_types=json.dumps(["HOODIE"]), download_count=200,
            price=Decimal("2.50"), created_at=now - timedelta(days=2),
        ),
        "ancien": Design(
            category_id=flowers.id, name="Vieille rose", slug="vieille-rose",
            design_image_url="https://cdn.test/old.png", tags="fleur",
            is_active=False, download_count=999, created_at=now - timedelta(days=10),
        ),
    }
    db_session.add_all(designs.values())
    await db_session.commit()

    return {
        "categories": {"fleurs": flowers.id, "animaux": animals.id, "archives": hidden.id},
        "designs": {key: design.id for key, design in designs.items()},
    }
