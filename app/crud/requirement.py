# app/crud/requirement.py
"""
Opérations CRUD pour les besoins clients (property_requirements)
"""

from typing import Optional, List
from supabase import Client
import logging

from app.core.exceptions import StoreError
from app.models import (
    Requirement, RequirementCreate, RequirementUpdate,
    RequirementStatus
)

logger = logging.getLogger(__name__)

REQUIREMENT_SELECT = "*, assigned_agent:assigned_agent_id(name, email)"


class RequirementCRUD:
    """Classe pour gérer les opérations CRUD sur les besoins clients"""

    def __init__(self, db: Client):
        self.db = db
        self.table_name = "property_requirements"

    def create(self, requirement_data: RequirementCreate, created_by: Optional[str] = None) -> Requirement:
        """
        Créer un nouveau besoin

        Args:
            requirement_data: Données du besoin à créer
            created_by: ID du profil qui saisit le besoin

        Returns:
            Besoin créé avec son ID

        Raises:
            StoreError: Si la création échoue
        """
        data = requirement_data.model_dump(mode="json")
        data["created_by"] = created_by

        try:
            response = self.db.table(self.table_name).insert(data).execute()
        except Exception as e:
            logger.error(f"Erreur création besoin: {e}")
            raise StoreError(str(e)) from e

        if not response.data:
            raise StoreError("Aucune donnée retournée après insertion")

        logger.info(f"Besoin créé avec succès: {response.data[0]['id']}")
        return Requirement(**response.data[0])

    def get_by_id(self, requirement_id: str) -> Optional[Requirement]:
        """
        Récupérer un besoin par son ID

        Args:
            requirement_id: UUID du besoin

        Returns:
            Besoin trouvé ou None
        """
        try:
            response = self.db.table(self.table_name)\
                .select(REQUIREMENT_SELECT)\
                .eq("id", requirement_id)\
                .execute()
        except Exception as e:
            logger.error(f"Erreur récupération besoin {requirement_id}: {e}")
            raise StoreError(str(e)) from e

        if response.data:
            return Requirement(**response.data[0])
        return None

    def get_all(
        self,
        assigned_agent_id: Optional[str] = None,
        limit: Optional[int] = None
    ) -> List[Requirement]:
        """
        Récupérer tous les besoins, plus récents en premier

        Args:
            assigned_agent_id: Restreindre à un agent assigné
            limit: Nombre maximum d'éléments à retourner

        Returns:
            Liste des besoins
        """
        try:
            query = self.db.table(self.table_name).select(REQUIREMENT_SELECT)

            if assigned_agent_id:
                query = query.eq("assigned_agent_id", assigned_agent_id)

            query = query.order("created_at", desc=True)
            if limit:
                query = query.limit(limit)

            response = query.execute()
        except Exception as e:
            logger.error(f"Erreur récupération liste besoins: {e}")
            raise StoreError(str(e)) from e

        return [Requirement(**item) for item in response.data or []]

    def update(self, requirement_id: str, requirement_data: RequirementUpdate) -> Optional[Requirement]:
        """
        Mettre à jour un besoin (seuls les champs fournis sont modifiés)
        """
        data = requirement_data.model_dump(mode="json", exclude_unset=True)
        if not data:
            raise ValueError("Aucune donnée à mettre à jour")
        return self._update_fields(requirement_id, data)

    def update_status(self, requirement_id: str, new_status: RequirementStatus) -> Optional[Requirement]:
        """Changer uniquement le statut"""
        return self._update_fields(requirement_id, {"status": new_status.value})

    def assign_agent(self, requirement_id: str, agent_id: Optional[str]) -> Optional[Requirement]:
        """Assigner (ou désassigner avec None) un agent"""
        return self._update_fields(requirement_id, {"assigned_agent_id": agent_id})

    def _update_fields(self, requirement_id: str, data: dict) -> Optional[Requirement]:
        try:
            response = self.db.table(self.table_name)\
                .update(data)\
                .eq("id", requirement_id)\
                .execute()
        except Exception as e:
            logger.error(f"Erreur mise à jour besoin {requirement_id}: {e}")
            raise StoreError(str(e)) from e

        if response.data:
            logger.info(f"Besoin {requirement_id} mis à jour: {list(data)}")
            return Requirement(**response.data[0])
        return None

    def delete(self, requirement_id: str) -> None:
        """Supprimer un besoin"""
        try:
            self.db.table(self.table_name).delete().eq("id", requirement_id).execute()
        except Exception as e:
            logger.error(f"Erreur suppression besoin {requirement_id}: {e}")
            raise StoreError(str(e)) from e
        logger.info(f"Besoin supprimé: {requirement_id}")


def get_requirement_crud(db: Client) -> RequirementCRUD:
    """Factory pour obtenir une instance de RequirementCRUD"""
    return RequirementCRUD(db)
