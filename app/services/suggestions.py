"""
Autosuggestion de la barre de recherche.

Chaque champ a une bande de priorité (titre 0, code 100, projet 200,
adresse 300, agent 400). Score = bande + position de la requête dans la
valeur (0 si la valeur commence par la requête), plafonnée à la largeur de
bande : un titre passe toujours avant un code, un code avant un projet, etc.
Tri croissant par score puis par texte, sans dépendre de l'ordre des
enregistrements.
"""
from typing import Any, Callable, Dict, Iterable, List, NamedTuple, Optional, Tuple

from app.models import Property, Requirement, Suggestion
from app.services.property_filters import normalize_query

BAND_WIDTH = 100
ADDRESS_MAX_CHARS = 50
DEFAULT_MAX_RESULTS = 10


class SuggestionField(NamedTuple):
    label: str
    band: int
    getter: Callable[[Any], Any]
    max_chars: Optional[int] = None


PROPERTY_SUGGESTION_FIELDS = (
    SuggestionField("Title", 0, lambda p: p.title),
    SuggestionField("Code", 100, lambda p: p.property_code),
    SuggestionField("Project", 200, lambda p: p.project.name if p.project else None),
    SuggestionField("Address", 300, lambda p: p.address, ADDRESS_MAX_CHARS),
    SuggestionField("Agent", 400, lambda p: p.agent.name if p.agent else None),
)

REQUIREMENT_SUGGESTION_FIELDS = (
    SuggestionField("Title", 0, lambda r: r.title),
    SuggestionField("Customer", 100, lambda r: r.customer_name),
    SuggestionField("Phone", 200, lambda r: r.customer_phone),
    SuggestionField("Location", 300, lambda r: r.preferred_locations, ADDRESS_MAX_CHARS),
    SuggestionField("Agent", 400, lambda r: r.assigned_agent.name if r.assigned_agent else None),
)


def truncate(text: str, limit: int) -> str:
    return text if len(text) <= limit else text[:limit] + "…"


def _field_values(field: SuggestionField, record) -> Iterable[str]:
    value = field.getter(record)
    if isinstance(value, (list, tuple)):
        return [v for v in value if v]
    return [value] if value else []


def rank_suggestions(
    records: Iterable[Any],
    query: Optional[str],
    fields: Tuple[SuggestionField, ...],
    max_results: int = DEFAULT_MAX_RESULTS
) -> List[Suggestion]:
    """Suggestions dédoublonnées par (champ, texte), meilleures en premier"""
    query = normalize_query(query)
    if not query or max_results <= 0:
        return []

    best: Dict[Tuple[str, str], int] = {}
    for record in records:
        for field in fields:
            for value in _field_values(field, record):
                value = str(value)
                position = value.lower().find(query)
                if position < 0:
                    continue
                score = field.band + min(position, BAND_WIDTH - 1)
                text = truncate(value, field.max_chars) if field.max_chars else value
                key = (field.label, text)
                if key not in best or score < best[key]:
                    best[key] = score

    ranked = sorted(best.items(), key=lambda item: (item[1], item[0][1].lower(), item[0][1]))
    return [
        Suggestion(text=text, field_label=label)
        for (label, text), _score in ranked[:max_results]
    ]


def suggest_properties(
    records: Iterable[Property],
    query: Optional[str],
    max_results: int = DEFAULT_MAX_RESULTS
) -> List[Suggestion]:
    return rank_suggestions(records, query, PROPERTY_SUGGESTION_FIELDS, max_results)


def suggest_requirements(
    records: Iterable[Requirement],
    query: Optional[str],
    max_results: int = DEFAULT_MAX_RESULTS
) -> List[Suggestion]:
    return rank_suggestions(records, query, REQUIREMENT_SUGGESTION_FIELDS, max_results)
