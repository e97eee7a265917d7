"""
Profils (admin / agent) et opérations d'authentification Supabase
"""
from typing import List, Optional, Tuple
from supabase import Client
import logging

from app.core.config import settings
from app.core.exceptions import StoreError, ValidationFailedError
from app.models import AgentCreate, Profile, ProfileUpdate, UserRole

logger = logging.getLogger(__name__)


class ProfileCRUD:
    def __init__(self, db: Client):
        self.db = db
        self.table = "profiles"

    def get_by_id(self, profile_id: str) -> Optional[Profile]:
        try:
            result = self.db.table(self.table)\
                .select("*")\
                .eq("id", profile_id)\
                .execute()
        except Exception as e:
            logger.error(f"✗ Erreur récupération profil {profile_id}: {e}")
            raise StoreError(str(e)) from e

        if result.data:
            return Profile(**result.data[0])
        return None

    def exists(self, profile_id: str) -> bool:
        return self.get_by_id(profile_id) is not None

    def list_agents(self) -> List[Profile]:
        """Agents triés par nom"""
        try:
            result = self.db.table(self.table)\
                .select("*")\
                .eq("role", UserRole.AGENT.value)\
                .order("name")\
                .execute()
        except Exception as e:
            logger.error(f"✗ Erreur récupération agents: {e}")
            raise StoreError(str(e)) from e

        return [Profile(**item) for item in result.data or []]

    def update(self, profile_id: str, profile_data: ProfileUpdate) -> Optional[Profile]:
        data = profile_data.model_dump(mode="json", exclude_unset=True)
        if not data:
            raise ValueError("Aucune donnée à mettre à jour")

        try:
            result = self.db.table(self.table)\
                .update(data)\
                .eq("id", profile_id)\
                .execute()
        except Exception as e:
            logger.error(f"✗ Erreur mise à jour profil {profile_id}: {e}")
            raise StoreError(str(e)) from e

        if result.data:
            logger.info(f"✓ Profil mis à jour: {profile_id}")
            return Profile(**result.data[0])
        return None

    def delete(self, profile_id: str) -> None:
        try:
            self.db.table(self.table).delete().eq("id", profile_id).execute()
        except Exception as e:
            logger.error(f"✗ Erreur suppression profil {profile_id}: {e}")
            raise StoreError(str(e)) from e
        logger.info(f"✓ Profil supprimé: {profile_id}")

    # ==================== AUTH ====================

    def create_agent(self, agent_data: AgentCreate) -> Profile:
        """
        Créer le compte auth puis le profil (nécessite le client service role)
        """
        try:
            response = self.db.auth.admin.create_user({
                "email": agent_data.email,
                "password": agent_data.password,
                "email_confirm": True,
                "user_metadata": {"name": agent_data.name, "role": agent_data.role.value},
            })
        except Exception as e:
            logger.error(f"✗ Erreur création compte {agent_data.email}: {e}")
            raise ValidationFailedError(str(e)) from e

        profile = {
            "id": response.user.id,
            "name": agent_data.name,
            "email": agent_data.email,
            "phone": agent_data.phone,
            "role": agent_data.role.value,
        }
        try:
            result = self.db.table(self.table).upsert(profile).execute()
        except Exception as e:
            logger.error(f"✗ Erreur création profil {agent_data.email}: {e}")
            raise StoreError(str(e)) from e

        logger.info(f"✓ Agent créé: {agent_data.email}")
        return Profile(**(result.data[0] if result.data else profile))

    def sign_in(self, email: str, password: str) -> Tuple[object, Profile]:
        """Connexion email / mot de passe -> (session, profil)"""
        try:
            response = self.db.auth.sign_in_with_password({"email": email, "password": password})
        except Exception as e:
            logger.warning(f"Connexion refusée pour {email}: {e}")
            raise ValidationFailedError("Email ou mot de passe incorrect") from e

        profile = self.get_by_id(response.user.id)
        if not profile:
            raise ValidationFailedError("Profil introuvable pour cet utilisateur")
        return response.session, profile

    def user_id_from_token(self, token: str) -> Optional[str]:
        """ID de l'utilisateur d'un JWT Supabase, None si invalide"""
        try:
            response = self.db.auth.get_user(token)
        except Exception as e:
            logger.warning(f"Jeton invalide: {e}")
            return None
        if not response or not response.user:
            return None
        return response.user.id

    def send_password_reset(self, email: str) -> None:
        options = {}
        if settings.PASSWORD_RESET_REDIRECT_URL:
            options["redirect_to"] = settings.PASSWORD_RESET_REDIRECT_URL
        try:
            self.db.auth.reset_password_for_email(email, options)
        except Exception as e:
            logger.error(f"✗ Erreur envoi email de réinitialisation {email}: {e}")
            raise StoreError(str(e)) from e
        logger.info(f"✓ Email de réinitialisation envoyé: {email}")


def get_profile_crud(db: Client) -> ProfileCRUD:
    return ProfileCRUD(db)
