"""
Filtres en mémoire pour les listes de propriétés et de besoins clients.

La liste complète est chargée une fois, puis filtrée localement à chaque
changement de critères. Les fonctions sont pures : l'ordre d'entrée est
conservé et la séquence d'origine n'est jamais modifiée.
"""
from typing import Iterable, List, Optional

from app.models import (
    FOUR_PLUS,
    Property,
    PropertyFilterCriteria,
    Requirement,
    RequirementFilterCriteria,
    SourceType,
)

DEFAULT_SOURCE_TYPE = SourceType.others.value


def enum_value(value) -> Optional[str]:
    """Valeur texte d'un enum (ou la valeur telle quelle)"""
    if value is None:
        return None
    return getattr(value, "value", value)


def source_type_of(prop: Property) -> str:
    """source_type avec 'Others' par défaut"""
    return enum_value(prop.source_type) or DEFAULT_SOURCE_TYPE


def normalize_query(query: Optional[str]) -> str:
    return (query or "").strip().lower()


def room_count_matches(value: Optional[int], wanted: Optional[str]) -> bool:
    """Égalité stricte ou sentinelle '4+' (>= 4)"""
    if wanted is None:
        return True
    if value is None:
        return False
    if wanted == FOUR_PLUS:
        return value >= 4
    return value == int(wanted)


def in_range(value: Optional[float], low: Optional[float], high: Optional[float]) -> bool:
    """Bornes inclusives ; une valeur nulle est exclue dès qu'une borne existe"""
    if low is None and high is None:
        return True
    if value is None:
        return False
    if low is not None and value < low:
        return False
    if high is not None and value > high:
        return False
    return True


def _contains(value: Optional[str], query: str) -> bool:
    return bool(value) and query in str(value).lower()


def property_matches_search(prop: Property, query: str) -> bool:
    """OU logique sur tous les champs texte de la propriété"""
    if not query:
        return True

    project = prop.project
    agent = prop.agent
    owner = prop.owner_details
    broker = prop.broker_details

    text_fields = (
        prop.title,
        prop.property_code,
        project.name if project else None,
        prop.address,
        agent.name if agent else None,
        owner.name if owner else None,
        broker.name if broker else None,
        prop.description,
        prop.type,
        enum_value(prop.property_code_type),
        source_type_of(prop),
    )
    if any(_contains(value, query) for value in text_fields):
        return True

    # Téléphones : recherche brute sur les chiffres
    phones = (owner.phone if owner else None, broker.phone if broker else None)
    return any(phone and query in phone for phone in phones)


def property_matches(prop: Property, criteria: PropertyFilterCriteria, query: str) -> bool:
    if criteria.status and prop.status != criteria.status:
        return False
    if criteria.property_code_type and enum_value(prop.property_code_type) != criteria.property_code_type:
        return False
    if criteria.source_type and source_type_of(prop) != criteria.source_type:
        return False
    if criteria.project_id and prop.project_id != criteria.project_id:
        return False
    if criteria.agent_id and prop.agent_id != criteria.agent_id:
        return False
    if not room_count_matches(prop.bedrooms, criteria.bedrooms):
        return False
    if not room_count_matches(prop.bathrooms, criteria.bathrooms):
        return False
    if not in_range(prop.price, criteria.min_price, criteria.max_price):
        return False
    if not in_range(prop.area, criteria.min_area, criteria.max_area):
        return False
    if not in_range(prop.price_per_sqft, criteria.min_price_per_sqft, criteria.max_price_per_sqft):
        return False
    return property_matches_search(prop, query)


def filter_properties(
    records: Iterable[Property],
    criteria: Optional[PropertyFilterCriteria] = None
) -> List[Property]:
    """Sous-ensemble des propriétés satisfaisant tous les critères"""
    if criteria is None:
        return list(records)
    query = normalize_query(criteria.search)
    return [prop for prop in records if property_matches(prop, criteria, query)]


def requirement_matches_search(req: Requirement, query: str) -> bool:
    if not query:
        return True
    text_fields = (req.title, req.customer_name, req.customer_email, *req.preferred_locations)
    if any(_contains(value, query) for value in text_fields):
        return True
    return bool(req.customer_phone) and query in req.customer_phone


def requirement_matches(req: Requirement, criteria: RequirementFilterCriteria, query: str) -> bool:
    if criteria.status and req.status != criteria.status:
        return False
    if criteria.priority and req.priority != criteria.priority:
        return False
    if criteria.assigned_agent_id and req.assigned_agent_id != criteria.assigned_agent_id:
        return False
    if criteria.property_type and (req.property_type or "").lower() != criteria.property_type.lower():
        return False
    return requirement_matches_search(req, query)


def filter_requirements(
    records: Iterable[Requirement],
    criteria: Optional[RequirementFilterCriteria] = None
) -> List[Requirement]:
    """Sous-ensemble des besoins satisfaisant tous les critères"""
    if criteria is None:
        return list(records)
    query = normalize_query(criteria.search)
    return [req for req in records if requirement_matches(req, criteria, query)]
