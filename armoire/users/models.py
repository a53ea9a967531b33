import re
import uuid
from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import EmailStr, Field as PydanticField, field_validator
from sqlmodel import SQLModel, Field

from armoire.addresses.models import AddressRead
from armoire.core.schemas import ApiModel
from armoire.core.utils import UTC_DATETIME, utcnow

USER_NAME_PATTERN = re.compile(r"^[a-zA-Z0-9_-]*$")


class UserRole(str, Enum):
    CUSTOMER = "CUSTOMER"
    ADMIN = "ADMIN"


# --- Modèle de table ---
class User(SQLModel, table=True):
    """
    Modèle de domaine représentant un utilisateur.

    Les adresses sont rattachées par `addresses.user_id` (ON DELETE CASCADE).
    Aucun mot de passe n'est stocké ici.
    """
    __tablename__ = "users"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    email: str = Field(max_length=100, unique=True, index=True)
    user_name: str = Field(max_length=50)
    phone: Optional[str] = Field(default=None, max_length=20)
    role: str = Field(default=UserRole.CUSTOMER.value, max_length=20)
    is_active: bool = Field(default=True)
    email_verified: bool = Field(default=False)
    verification_token: Optional[str] = Field(default=None, max_length=255, index=True)
    verification_token_expiry: Optional[datetime] = Field(default=None, sa_type=UTC_DATETIME)
    password_reset_token: Optional[str] = Field(default=None, max_length=255, index=True)
    password_reset_token_expiry: Optional[datetime] = Field(default=None, sa_type=UTC_DATETIME)
    created_at: datetime = Field(default_factory=utcnow, sa_type=UTC_DATETIME)
    updated_at: datetime = Field(default_factory=utcnow, sa_type=UTC_DATETIME)


def _validate_user_name(v: Optional[str]) -> Optional[str]:
    if v is None:
        return None
    v = v.strip()
    if not 3 <= len(v) <= 50:
        raise ValueError("Le nom d'utilisateur doit contenir entre 3 et 50 caractères")
    if not USER_NAME_PATTERN.match(v):
        raise ValueError("Le nom d'utilisateur ne peut contenir que des lettres, chiffres, '_' et '-'")
    return v


def _validate_email_length(v: Optional[str]) -> Optional[str]:
    if v is not None and len(v) > 100:
        raise ValueError("L'email ne peut pas dépasser 100 caractères")
    return v


# --- Schémas API ---
class UserCreate(ApiModel):
    email: EmailStr
    user_name: str
    phone: Optional[str] = PydanticField(default=None, max_length=20)

    @field_validator("user_name")
    @classmethod
    def validate_user_name(cls, v):
        return _validate_user_name(v)

    @field_validator("email")
    @classmethod
    def validate_email_length(cls, v):
        return _validate_email_length(v)


class UserUpdate(ApiModel):
    """
    Mise à jour partielle du profil.

    Seuls les champs fournis (non None) sont appliqués.
    """
    email: Optional[EmailStr] = None
    user_name: Optional[str] = None
    phone: Optional[str] = PydanticField(default=None, max_length=20)

    @field_validator("user_name")
    @classmethod
    def validate_user_name(cls, v):
        return _validate_user_name(v)

    @field_validator("email")
    @classmethod
    def validate_email_length(cls, v):
        return _validate_email_length(v)


class UserRead(ApiModel):
    id: uuid.UUID
    email: str
    user_name: str
    phone: Optional[str] = None
    role: str
    email_verified: bool
    created_at: datetime


class UserProfile(UserRead):
    addresses: List[AddressRead] = []


class PasswordResetRequest(ApiModel):
    email: EmailStr
