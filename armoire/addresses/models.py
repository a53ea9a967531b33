import re
import uuid
from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import ConfigDict, Field as PydanticField, field_validator
from sqlmodel import SQLModel, Field

from armoire.core.schemas import ApiModel
from armoire.core.utils import UTC_DATETIME, utcnow

POSTAL_CODE_PATTERN = re.compile(r"^[0-9]{5,10}$")


class AddressType(str, Enum):
    HOME = "HOME"
    OFFICE = "OFFICE"
    OTHER = "OTHER"


# --- Modèle de table pour les adresses ---
class Address(SQLModel, table=True):
    """
    Modèle de domaine représentant une adresse.

    Au plus une adresse par utilisateur porte `is_default=True`. La règle est
    appliquée par AddressService, pas par une contrainte en base.

    Attributes:
        id: Identifiant unique de l'adresse
        user_id: Identifiant de l'utilisateur propriétaire
        address_type: HOME, OFFICE ou OTHER
        is_default: Indique si c'est l'adresse par défaut de l'utilisateur
        created_at: Date de création (jamais modifiée)
    """
    __tablename__ = "addresses"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    user_id: uuid.UUID = Field(foreign_key="users.id", ondelete="CASCADE", index=True)
    address_type: str = Field(default=AddressType.HOME.value, max_length=20)
    street_address: str = Field(max_length=500)
    city: str = Field(max_length=100)
    state: str = Field(max_length=100)
    postal_code: str = Field(max_length=10)
    country: str = Field(max_length=100)
    is_default: bool = Field(default=False)
    created_at: datetime = Field(default_factory=utcnow, sa_type=UTC_DATETIME)


def _clean_text(v: Optional[str], label: str) -> Optional[str]:
    if v is None:
        return None
    if v.strip() == "":
        raise ValueError(f"Le champ {label} ne peut pas être vide")
    return v.strip()


def _clean_postal_code(v: Optional[str]) -> Optional[str]:
    v = _clean_text(v, "code postal")
    if v is not None and not POSTAL_CODE_PATTERN.match(v):
        raise ValueError("Le code postal doit contenir entre 5 et 10 chiffres")
    return v


# --- Schémas API pour les adresses ---
class AddressCreate(ApiModel):
    """
    Schéma pour la création d'une adresse.

    Le propriétaire est fourni par le chemin de la requête, pas par le corps.
    """
    model_config = ConfigDict(use_enum_values=True)

    address_type: AddressType = AddressType.HOME
    street_address: str = PydanticField(max_length=500)
    city: str = PydanticField(max_length=100)
    state: str = PydanticField(max_length=100)
    postal_code: str
    country: str = PydanticField(max_length=100)
    is_default: bool = False

    @field_validator("street_address", "city", "state", "country")
    @classmethod
    def validate_text(cls, v, info):
        return _clean_text(v, info.field_name)

    @field_validator("postal_code")
    @classmethod
    def validate_postal_code(cls, v):
        return _clean_postal_code(v)


class AddressUpdate(ApiModel):
    """
    Schéma pour la mise à jour partielle d'une adresse.

    Tous les champs sont optionnels: un champ absent (ou null) laisse la valeur
    actuelle inchangée. `is_default` est à trois états (absent, True, False).
    """
    model_config = ConfigDict(use_enum_values=True)

    address_type: Optional[AddressType] = None
    street_address: Optional[str] = PydanticField(default=None, max_length=500)
    city: Optional[str] = PydanticField(default=None, max_length=100)
    state: Optional[str] = PydanticField(default=None, max_length=100)
    postal_code: Optional[str] = None
    country: Optional[str] = PydanticField(default=None, max_length=100)
    is_default: Optional[bool] = None

    @field_validator("street_address", "city", "state", "country")
    @classmethod
    def validate_text(cls, v, info):
        return _clean_text(v, info.field_name)

    @field_validator("postal_code")
    @classmethod
    def validate_postal_code(cls, v):
        return _clean_postal_code(v)


class AddressRead(ApiModel):
    """Représentation exposée d'une adresse (plate, sans identifiant du propriétaire)."""
    id: uuid.UUID
    address_type: str
    street_address: str
    city: str
    state: str
    postal_code: str
    country: str
    is_default: bool
    created_at: datetime
