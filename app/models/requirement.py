# app/models/requirement.py
"""
Modèles Pydantic pour les besoins clients (property_requirements)
Un besoin décrit le bien recherché par un client et son suivi par un agent
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional
from datetime import datetime
from enum import Enum
import re

from .property import AgentRef


class RequirementPriority(str, Enum):
    """Niveau de priorité du besoin"""
    low = "low"
    medium = "medium"
    high = "high"
    urgent = "urgent"


class RequirementStatus(str, Enum):
    """Statut du besoin"""
    active = "active"          # En recherche
    fulfilled = "fulfilled"    # Bien trouvé
    closed = "closed"          # Abandonné / clôturé


class RequirementBase(BaseModel):
    """Modèle de base pour un besoin client"""
    title: str = Field(..., min_length=1, max_length=200)

    # Client
    customer_name: str = Field(..., min_length=1, max_length=100)
    customer_phone: str = Field(..., min_length=3, max_length=30)
    customer_email: Optional[str] = Field(None, max_length=255)

    # Critères recherchés
    property_type: Optional[str] = Field(None, max_length=50)
    price: Optional[float] = Field(None, ge=0)
    bedrooms: Optional[int] = Field(None, ge=0)
    bathrooms: Optional[int] = Field(None, ge=0)
    area: Optional[float] = Field(None, ge=0)
    preferred_locations: list[str] = Field(default_factory=list)

    # Suivi
    priority: RequirementPriority = RequirementPriority.medium
    status: RequirementStatus = RequirementStatus.active
    assigned_agent_id: Optional[str] = None
    description: Optional[str] = Field(None, max_length=2000)
    notes: Optional[str] = Field(None, max_length=2000)

    @field_validator("customer_email")
    @classmethod
    def validate_email(cls, v: Optional[str]) -> Optional[str]:
        """Valider le format email"""
        if not v:
            return None
        pattern = r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$'
        if not re.match(pattern, v):
            raise ValueError('Format email invalide')
        return v.lower()

    @field_validator("preferred_locations", mode="before")
    @classmethod
    def clean_locations(cls, v):
        """Supprimer les lieux vides"""
        if not v:
            return []
        return [loc.strip() for loc in v if loc and loc.strip()]


class RequirementCreate(RequirementBase):
    """Modèle pour créer un besoin"""
    pass


class RequirementUpdate(BaseModel):
    """Modèle pour mettre à jour un besoin (tous les champs optionnels)"""
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    customer_name: Optional[str] = Field(None, min_length=1, max_length=100)
    customer_phone: Optional[str] = Field(None, min_length=3, max_length=30)
    customer_email: Optional[str] = Field(None, max_length=255)
    property_type: Optional[str] = Field(None, max_length=50)
    price: Optional[float] = Field(None, ge=0)
    bedrooms: Optional[int] = Field(None, ge=0)
    bathrooms: Optional[int] = Field(None, ge=0)
    area: Optional[float] = Field(None, ge=0)
    preferred_locations: Optional[list[str]] = None
    priority: Optional[RequirementPriority] = None
    status: Optional[RequirementStatus] = None
    assigned_agent_id: Optional[str] = None
    description: Optional[str] = Field(None, max_length=2000)
    notes: Optional[str] = Field(None, max_length=2000)


class Requirement(RequirementBase):
    """Modèle complet d'un besoin avec métadonnées"""
    model_config = ConfigDict(from_attributes=True)

    id: str
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    assigned_agent: Optional[AgentRef] = None
