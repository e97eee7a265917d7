# app/models/filters.py
"""
Critères de filtrage et suggestions pour les listes en mémoire.
Les critères sont immuables : un champ absent ou vide = pas de contrainte.
"""
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from typing import Optional

from .property import PropertyStatus
from .requirement import RequirementPriority, RequirementStatus

# Valeur sentinelle "4 et plus" pour chambres / salles de bain
FOUR_PLUS = "4+"


def _drop_empty_strings(data):
    if isinstance(data, dict):
        return {
            key: value for key, value in data.items()
            if not (isinstance(value, str) and not value.strip())
        }
    return data


class PropertyFilterCriteria(BaseModel):
    """Critères de la liste des propriétés (combinés par ET logique)"""
    model_config = ConfigDict(frozen=True)

    status: Optional[PropertyStatus] = None
    property_code_type: Optional[str] = None
    source_type: Optional[str] = None
    project_id: Optional[str] = None
    agent_id: Optional[str] = None
    bedrooms: Optional[str] = None
    bathrooms: Optional[str] = None
    min_price: Optional[float] = None
    max_price: Optional[float] = None
    min_area: Optional[float] = None
    max_area: Optional[float] = None
    min_price_per_sqft: Optional[float] = None
    max_price_per_sqft: Optional[float] = None
    search: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def drop_empty_strings(cls, data):
        return _drop_empty_strings(data)

    @field_validator("bedrooms", "bathrooms", mode="before")
    @classmethod
    def validate_room_count(cls, v):
        """Un entier ou la sentinelle '4+'"""
        if v is None:
            return v
        v = str(v).strip()
        if v != FOUR_PLUS and not v.isdigit():
            raise ValueError("Valeur attendue : un entier ou '4+'")
        return v


class RequirementFilterCriteria(BaseModel):
    """Critères de la liste des besoins clients"""
    model_config = ConfigDict(frozen=True)

    status: Optional[RequirementStatus] = None
    priority: Optional[RequirementPriority] = None
    assigned_agent_id: Optional[str] = None
    property_type: Optional[str] = None
    search: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def drop_empty_strings(cls, data):
        return _drop_empty_strings(data)


class Suggestion(BaseModel):
    """Suggestion d'autocomplétion avec le libellé du champ source"""
    model_config = ConfigDict(frozen=True)

    text: str
    field_label: str


class PropertyStats(BaseModel):
    total: int = 0
    available: int = 0
    pending: int = 0
    sold: int = 0


class RequirementStats(BaseModel):
    total: int = 0
    active: int = 0
    fulfilled: int = 0
    closed: int = 0
    high_priority: int = Field(0, description="Besoins actifs high ou urgent")
    unassigned: int = 0
