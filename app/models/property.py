# app/models/property.py

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional
from datetime import datetime
from enum import Enum


class PropertyStatus(str, Enum):
    available = "available"
    pending = "pending"
    sold = "sold"


class PropertyCodeType(str, Enum):
    new_apartment = "New Apartment"
    old_apartment = "Old Apartment"
    new_house = "New House"
    old_house = "Old House"
    site = "Site"


class SourceType(str, Enum):
    inhouse = "Inhouse"
    others = "Others"


class ContactDetails(BaseModel):
    """Coordonnées propriétaire / courtier"""
    name: Optional[str] = None
    phone: Optional[str] = None


class ProjectRef(BaseModel):
    """Projet joint (project:projects(name, location))"""
    name: Optional[str] = None
    location: Optional[str] = None


class AgentRef(BaseModel):
    """Agent joint (agent:profiles(name, email))"""
    name: Optional[str] = None
    email: Optional[str] = None


class PropertyBase(BaseModel):
    project_id: Optional[str] = None
    agent_id: Optional[str] = None
    title: str = Field(..., min_length=1, max_length=200)
    type: Optional[str] = Field(None, max_length=50)
    price: Optional[float] = Field(None, ge=0)
    description: Optional[str] = Field(None, max_length=5000)
    bedrooms: Optional[int] = Field(None, ge=0)
    bathrooms: Optional[int] = Field(None, ge=0)
    area: Optional[float] = Field(None, ge=0)
    address: Optional[str] = Field(None, max_length=500)
    status: PropertyStatus = PropertyStatus.available
    images: list[str] = Field(default_factory=list)
    property_code: Optional[str] = Field(None, max_length=20)
    property_code_type: Optional[PropertyCodeType] = None
    owner_details: Optional[ContactDetails] = None
    broker_details: Optional[ContactDetails] = None
    price_per_sqft: Optional[float] = Field(None, ge=0)
    location_url: Optional[str] = None
    source_type: Optional[SourceType] = None

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Le titre est obligatoire")
        return v.strip()

    @field_validator("images", mode="before")
    @classmethod
    def images_default(cls, v):
        return v or []


class PropertyCreate(PropertyBase):
    pass


class PropertyUpdate(BaseModel):
    """Tous les champs sont optionnels pour la mise à jour"""
    project_id: Optional[str] = None
    agent_id: Optional[str] = None
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    type: Optional[str] = Field(None, max_length=50)
    price: Optional[float] = Field(None, ge=0)
    description: Optional[str] = Field(None, max_length=5000)
    bedrooms: Optional[int] = Field(None, ge=0)
    bathrooms: Optional[int] = Field(None, ge=0)
    area: Optional[float] = Field(None, ge=0)
    address: Optional[str] = Field(None, max_length=500)
    status: Optional[PropertyStatus] = None
    images: Optional[list[str]] = None
    property_code: Optional[str] = Field(None, max_length=20)
    property_code_type: Optional[PropertyCodeType] = None
    owner_details: Optional[ContactDetails] = None
    broker_details: Optional[ContactDetails] = None
    price_per_sqft: Optional[float] = Field(None, ge=0)
    location_url: Optional[str] = None
    source_type: Optional[SourceType] = None


class PropertyWebhookPayload(BaseModel):
    """
    Corps du webhook add-property.
    Le titre est optionnel ici pour renvoyer un 400 explicite plutôt qu'un 422.
    Les longueurs et bornes sont celles de PropertyBase.
    """
    model_config = ConfigDict(extra="ignore")

    project_id: Optional[str] = None
    agent_id: Optional[str] = None
    title: Optional[str] = Field(None, max_length=200)
    type: Optional[str] = Field(None, max_length=50)
    price: Optional[float] = Field(None, ge=0)
    description: Optional[str] = Field(None, max_length=5000)
    bedrooms: Optional[int] = Field(None, ge=0)
    bathrooms: Optional[int] = Field(None, ge=0)
    area: Optional[float] = Field(None, ge=0)
    address: Optional[str] = Field(None, max_length=500)
    status: PropertyStatus = PropertyStatus.available
    images: list[str] = Field(default_factory=list)
    property_code: Optional[str] = Field(None, max_length=20)
    property_code_type: Optional[str] = None
    owner_details: Optional[ContactDetails] = None
    broker_details: Optional[ContactDetails] = None
    price_per_sqft: Optional[float] = Field(None, ge=0)
    location_url: Optional[str] = None
    source_type: Optional[SourceType] = None

    @field_validator("images", mode="before")
    @classmethod
    def images_as_list(cls, v):
        return v if isinstance(v, list) else []


class Property(BaseModel):
    """
    Modèle complet avec métadonnées et jointures.
    Sans contraintes de saisie : une ligne déjà stockée doit toujours pouvoir être relue.
    """
    model_config = ConfigDict(from_attributes=True)

    id: str
    project_id: Optional[str] = None
    agent_id: Optional[str] = None
    title: str
    type: Optional[str] = None
    price: Optional[float] = None
    description: Optional[str] = None
    bedrooms: Optional[int] = None
    bathrooms: Optional[int] = None
    area: Optional[float] = None
    address: Optional[str] = None
    status: PropertyStatus = PropertyStatus.available
    images: list[str] = Field(default_factory=list)
    property_code: Optional[str] = None
    property_code_type: Optional[PropertyCodeType] = None
    owner_details: Optional[ContactDetails] = None
    broker_details: Optional[ContactDetails] = None
    price_per_sqft: Optional[float] = None
    location_url: Optional[str] = None
    source_type: Optional[SourceType] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    project: Optional[ProjectRef] = None
    agent: Optional[AgentRef] = None

    @field_validator("images", mode="before")
    @classmethod
    def images_default(cls, v):
        return v or []
