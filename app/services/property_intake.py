"""
Ajout de propriété par webhook / API externe (POST /functions/v1/add-property).

Deux modes d'authentification :
- Bearer <JWT Supabase> : l'utilisateur devient l'agent (un admin peut
  désigner un autre agent via agent_id)
- Bearer <PROPERTY_API_KEY> : agent_id obligatoire dans le corps
"""
import logging
from typing import Any, Dict, Optional

from supabase import Client

from app.core.exceptions import AuthenticationError, ValidationFailedError
from app.crud import ProfileCRUD, ProjectCRUD, PropertyCRUD
from app.models import PropertyCodeType, PropertyWebhookPayload, UserRole
from app.services.property_code import PropertyCodeGenerator
from app.services.property_service import build_code_generator, ensure_code_available

logger = logging.getLogger(__name__)

CODE_TYPES = {item.value for item in PropertyCodeType}


def extract_bearer_token(authorization: Optional[str]) -> str:
    if not authorization:
        raise AuthenticationError("En-tête Authorization manquant")
    token = authorization.replace("Bearer ", "", 1).strip()
    if not token:
        raise AuthenticationError("En-tête Authorization manquant")
    return token


class PropertyIntakeService:
    def __init__(
        self,
        properties: PropertyCRUD,
        projects: ProjectCRUD,
        profiles: ProfileCRUD,
        code_generator: PropertyCodeGenerator,
        api_key: Optional[str] = None
    ):
        self.properties = properties
        self.projects = projects
        self.profiles = profiles
        self.code_generator = code_generator
        self.api_key = api_key

    @classmethod
    def from_db(cls, db: Client, api_key: Optional[str] = None) -> "PropertyIntakeService":
        properties = PropertyCRUD(db)
        return cls(
            properties,
            ProjectCRUD(db),
            ProfileCRUD(db),
            build_code_generator(properties),
            api_key=api_key,
        )

    def add_property(self, token: str, payload: PropertyWebhookPayload) -> Dict[str, Any]:
        """
        Valide et insère la propriété, retourne la ligne insérée.

        Raises:
            AuthenticationError: jeton invalide
            ValidationFailedError: titre manquant, agent_id / project_id invalide, code déjà utilisé
            PropertyCodeError: code impossible à vérifier
        """
        using_api_key = bool(self.api_key) and token == self.api_key
        user_id = None
        is_admin = False

        if not using_api_key:
            user_id = self.profiles.user_id_from_token(token)
            if not user_id:
                raise AuthenticationError("Jeton d'autorisation invalide")
            profile = self.profiles.get_by_id(user_id)
            is_admin = bool(profile) and profile.role == UserRole.ADMIN

        if not payload.title or not payload.title.strip():
            raise ValidationFailedError("Le titre est obligatoire")

        if using_api_key and not payload.agent_id:
            raise ValidationFailedError("agent_id est obligatoire avec une clé API")

        agent_id = payload.agent_id if (using_api_key or is_admin) and payload.agent_id else user_id
        if agent_id and not self.profiles.exists(agent_id):
            raise ValidationFailedError("agent_id invalide")

        if payload.project_id and not self.projects.exists(payload.project_id):
            raise ValidationFailedError("project_id invalide")

        if payload.property_code_type and payload.property_code_type not in CODE_TYPES:
            raise ValidationFailedError(f"property_code_type invalide: {payload.property_code_type}")

        property_code = (payload.property_code or "").strip()
        if property_code:
            ensure_code_available(self.properties, property_code)
        elif payload.property_code_type:
            property_code = self.code_generator.generate(payload.property_code_type)

        data = payload.model_dump(mode="json")
        data.update({
            "title": payload.title.strip(),
            "agent_id": agent_id,
            "property_code": property_code or None,
            "property_code_type": payload.property_code_type or None,
        })

        created = self.properties.insert_row(data)
        logger.info(f"✓ Propriété ajoutée via API ({'clé API' if using_api_key else 'JWT'}): {created.id}")
        return created.model_dump(mode="json")
