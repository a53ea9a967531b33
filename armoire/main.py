"""
Module principal de l'application FastAPI Armoire.

Configure le logging, les middlewares (CORS) et inclut les routeurs des
différents modules: utilisateurs, adresses, catalogue de designs et tarification.
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from armoire.config import settings
from armoire.database import create_tables
from armoire.addresses.router import router as address_router
from armoire.designs.dependencies import get_redis_client
from armoire.designs.router import category_router, design_router
from armoire.pricing.router import router as pricing_router
from armoire.users.router import user_router

# Configurer le logging
logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.DB_CREATE_TABLES:
        logger.info("Création des tables (DB_CREATE_TABLES=true)")
        await create_tables()
    yield
    if get_redis_client.cache_info().currsize:
        await get_redis_client().aclose()
        logger.info("Client Redis fermé.")


app = FastAPI(
    title=settings.PROJECT_NAME,
    description="API du catalogue de designs, des profils utilisateurs et de leurs adresses.",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ======================================================
# Inclure les routeurs
# ======================================================
API = settings.API_V1_PREFIX

app.include_router(user_router, prefix=f"{API}/users", tags=["Utilisateurs"])
app.include_router(address_router, prefix=f"{API}/users/{{user_id}}/addresses", tags=["Adresses"])
app.include_router(category_router, prefix=f"{API}/design-categories", tags=["Catégories de designs"])
app.include_router(design_router, prefix=f"{API}/designs", tags=["Designs"])
app.include_router(pricing_router, prefix=f"{API}/pricing", tags=["Tarification"])


@app.get("/")
async def root():
    return {"message": "Armoire API opérationnelle"}
