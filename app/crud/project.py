"""
Opérations CRUD pour Projects
"""
from typing import List, Optional
from supabase import Client
from app.core.exceptions import StoreError
from app.models import Project, ProjectCreate, ProjectUpdate
import logging

logger = logging.getLogger(__name__)


class ProjectCRUD:
    def __init__(self, db: Client):
        self.db = db
        self.table = "projects"

    def create(self, project_data: ProjectCreate, created_by: Optional[str] = None) -> Project:
        """Créer un projet"""
        data = project_data.model_dump(mode="json")
        data["created_by"] = created_by

        try:
            result = self.db.table(self.table).insert(data).execute()
        except Exception as e:
            logger.error(f"✗ Erreur création projet: {e}")
            raise StoreError(str(e)) from e

        if not result.data:
            raise StoreError("Aucune donnée retournée après insertion")

        logger.info(f"✓ Projet créé: {result.data[0]['id']}")
        return Project(**result.data[0])

    def get_by_id(self, project_id: str) -> Optional[Project]:
        try:
            result = self.db.table(self.table)\
                .select("*")\
                .eq("id", project_id)\
                .execute()
        except Exception as e:
            logger.error(f"✗ Erreur récupération projet {project_id}: {e}")
            raise StoreError(str(e)) from e

        if result.data:
            return Project(**result.data[0])
        return None

    def exists(self, project_id: str) -> bool:
        return self.get_by_id(project_id) is not None

    def get_all(self) -> List[Project]:
        try:
            result = self.db.table(self.table)\
                .select("*")\
                .order("created_at", desc=True)\
                .execute()
        except Exception as e:
            logger.error(f"✗ Erreur récupération projets: {e}")
            raise StoreError(str(e)) from e

        return [Project(**item) for item in result.data or []]

    def update(self, project_id: str, project_data: ProjectUpdate) -> Optional[Project]:
        data = project_data.model_dump(mode="json", exclude_unset=True)
        if not data:
            raise ValueError("Aucune donnée à mettre à jour")

        try:
            result = self.db.table(self.table)\
                .update(data)\
                .eq("id", project_id)\
                .execute()
        except Exception as e:
            logger.error(f"✗ Erreur mise à jour projet {project_id}: {e}")
            raise StoreError(str(e)) from e

        if result.data:
            logger.info(f"✓ Projet mis à jour: {project_id}")
            return Project(**result.data[0])
        return None

    def delete(self, project_id: str) -> None:
        """Supprimer un projet (la base supprime ses propriétés en cascade)"""
        try:
            self.db.table(self.table).delete().eq("id", project_id).execute()
        except Exception as e:
            logger.error(f"✗ Erreur suppression projet {project_id}: {e}")
            raise StoreError(str(e)) from e
        logger.info(f"✓ Projet supprimé: {project_id}")


def get_project_crud(db: Client) -> ProjectCRUD:
    return ProjectCRUD(db)
