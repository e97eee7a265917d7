# app/models/user.py
from pydantic import BaseModel, EmailStr, Field, ConfigDict
from typing import Optional
from datetime import datetime
from enum import Enum


class UserRole(str, Enum):
    """Rôles utilisateurs"""
    ADMIN = "admin"
    AGENT = "agent"


class ProfileBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    phone: Optional[str] = Field(None, max_length=30)
    role: UserRole = UserRole.AGENT


# Création d'un agent (avec mot de passe)
class AgentCreate(ProfileBase):
    password: str = Field(..., min_length=6)


# Mise à jour
class ProfileUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    phone: Optional[str] = Field(None, max_length=30)
    role: Optional[UserRole] = None


# Complet
class Profile(ProfileBase):
    model_config = ConfigDict(from_attributes=True)

    id: str
    created_at: Optional[datetime] = None


class Actor(BaseModel):
    """Utilisateur authentifié qui effectue l'action (Admin ou Agent(id))"""
    model_config = ConfigDict(frozen=True)

    id: str
    role: UserRole

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN


# Auth
class UserLogin(BaseModel):
    email: EmailStr
    password: str


class PasswordResetRequest(BaseModel):
    email: EmailStr


class TokenResponse(BaseModel):
    access_token: str
    refresh_token: Optional[str] = None
    token_type: str = "bearer"
    user: Profile
