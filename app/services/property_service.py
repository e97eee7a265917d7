"""
Service propriétés : règles métier au-dessus de PropertyCRUD.

Toutes les modifications passent par ici avec l'acteur authentifié,
qui est contrôlé par services.authorization.
"""
import logging
from typing import List, Optional

from supabase import Client

from app.core.config import settings
from app.core.exceptions import (
    NotFoundError,
    PermissionDeniedError,
    PropertyCodeError,
    ValidationFailedError,
)
from app.crud import PropertyCRUD, ProjectCRUD, ProfileCRUD
from app.models import (
    Actor,
    Property,
    PropertyCreate,
    PropertyFilterCriteria,
    PropertyUpdate,
    Suggestion,
)
from app.services.authorization import ensure_can_mutate_property
from app.services.property_code import PropertyCodeGenerator
from app.services.property_filters import enum_value, filter_properties
from app.services.share_text import ShareFormat, render_property_share
from app.services.suggestions import suggest_properties

logger = logging.getLogger(__name__)


def build_code_generator(crud: PropertyCRUD) -> PropertyCodeGenerator:
    return PropertyCodeGenerator(
        authoritative=crud.generate_code_rpc,
        exists=crud.code_exists,
        max_check_retries=settings.CODE_CHECK_MAX_RETRIES,
        backoff_seconds=settings.CODE_CHECK_BACKOFF_SECONDS,
    )


def ensure_code_available(crud: PropertyCRUD, code: str, exclude_id: Optional[str] = None) -> None:
    """
    Refuse un code saisi déjà porté par un autre bien (casse ignorée).

    Raises:
        ValidationFailedError: code déjà utilisé
        PropertyCodeError: vérification impossible
    """
    try:
        taken = crud.code_exists(code, exclude_id=exclude_id)
    except Exception as e:
        logger.error(f"✗ Vérification du code {code} impossible: {e}")
        raise PropertyCodeError(f"Impossible de vérifier l'unicité du code {code}") from e
    if taken:
        raise ValidationFailedError(f"Le code {code} est déjà utilisé")


class PropertyService:
    def __init__(
        self,
        crud: PropertyCRUD,
        projects: ProjectCRUD,
        profiles: ProfileCRUD,
        code_generator: PropertyCodeGenerator,
        agency: str = settings.AGENCY_NAME
    ):
        self.crud = crud
        self.projects = projects
        self.profiles = profiles
        self.code_generator = code_generator
        self.agency = agency

    @classmethod
    def from_db(cls, db: Client) -> "PropertyService":
        crud = PropertyCRUD(db)
        return cls(crud, ProjectCRUD(db), ProfileCRUD(db), build_code_generator(crud))

    # ==================== LECTURE ====================

    def get(self, property_id: str) -> Property:
        prop = self.crud.get_by_id(property_id)
        if not prop:
            raise NotFoundError(f"Propriété {property_id} non trouvée")
        return prop

    def get_by_code(self, code: str) -> Property:
        prop = self.crud.find_by_code(code.strip())
        if not prop:
            raise NotFoundError(f"Aucune propriété avec le code {code}")
        return prop

    def list_filtered(self, criteria: Optional[PropertyFilterCriteria] = None) -> List[Property]:
        return filter_properties(self.crud.get_all(), criteria)

    def suggest(self, query: str, max_results: int = settings.SUGGESTIONS_MAX_RESULTS) -> List[Suggestion]:
        return suggest_properties(self.crud.get_all(), query, max_results)

    def share_text(self, property_id: str, fmt: ShareFormat) -> str:
        return render_property_share(self.get(property_id), fmt, self.agency)

    def generate_code(self, code_type: str) -> str:
        return self.code_generator.generate(code_type)

    # ==================== ÉCRITURE ====================

    def create(self, actor: Actor, property_data: PropertyCreate) -> Property:
        """Créer une annonce ; un agent ne peut créer que pour lui-même"""
        agent_id = property_data.agent_id
        if not actor.is_admin:
            if agent_id and agent_id != actor.id:
                raise PermissionDeniedError("Un agent ne peut créer une annonce que pour lui-même")
            agent_id = actor.id

        self._check_references(property_data.project_id, agent_id)
        updates = {"agent_id": agent_id}

        if property_data.property_code:
            ensure_code_available(self.crud, property_data.property_code)
        elif property_data.property_code_type:
            updates["property_code"] = self.generate_code(enum_value(property_data.property_code_type))

        return self.crud.create(property_data.model_copy(update=updates))

    def update(self, actor: Actor, property_id: str, patch: PropertyUpdate) -> Property:
        existing = self.get(property_id)
        ensure_can_mutate_property(actor, existing)

        changes = patch.model_dump(exclude_unset=True)
        if not changes:
            raise ValidationFailedError("Aucune donnée à mettre à jour")
        if not actor.is_admin and changes.get("agent_id", actor.id) != actor.id:
            raise PermissionDeniedError("Un agent ne peut pas réattribuer une annonce")
        if "title" in changes and not (patch.title or "").strip():
            raise ValidationFailedError("Le titre est obligatoire")

        self._check_references(changes.get("project_id"), changes.get("agent_id"))

        code_type = changes.get("property_code_type", existing.property_code_type)
        code = changes.get("property_code", existing.property_code)
        if changes.get("property_code"):
            ensure_code_available(self.crud, changes["property_code"], exclude_id=property_id)
        elif code_type and not code:
            patch = patch.model_copy(update={"property_code": self.generate_code(enum_value(code_type))})

        updated = self.crud.update(property_id, patch)
        if not updated:
            raise NotFoundError(f"Propriété {property_id} non trouvée")
        return updated

    def delete(self, actor: Actor, property_id: str) -> None:
        ensure_can_mutate_property(actor, self.get(property_id))
        self.crud.delete(property_id)

    def _check_references(self, project_id: Optional[str], agent_id: Optional[str]) -> None:
        if project_id and not self.projects.exists(project_id):
            raise ValidationFailedError("project_id invalide")
        if agent_id and not self.profiles.exists(agent_id):
            raise ValidationFailedError("agent_id invalide")