"""
Opérations CRUD pour Properties
"""
from typing import List, Optional
from supabase import Client
from app.core.exceptions import StoreError
from app.models import Property, PropertyCreate, PropertyUpdate
import logging

logger = logging.getLogger(__name__)

# Jointures agent / projet utilisées par les listes et le partage
PROPERTY_SELECT = (
    "*, agent:profiles!properties_agent_id_fkey(name, email), "
    "project:projects(name, location)"
)


def escape_like(value: str) -> str:
    """Échappe les jokers LIKE (\\, % et _) pour une comparaison littérale"""
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def same_code(stored: Optional[str], code: str) -> bool:
    return stored is not None and stored.strip().upper() == code.strip().upper()


class PropertyCRUD:
    def __init__(self, db: Client):
        self.db = db
        self.table = "properties"

    def create(self, property_data: PropertyCreate) -> Property:
        """Créer une nouvelle annonce"""
        return self.insert_row(property_data.model_dump(mode="json"))

    def insert_row(self, data: dict) -> Property:
        """Insérer une ligne déjà préparée (webhook)"""
        try:
            result = self.db.table(self.table).insert(data).execute()
        except Exception as e:
            logger.error(f"✗ Erreur création propriété: {e}")
            raise StoreError(str(e)) from e

        if not result.data:
            raise StoreError("Aucune donnée retournée après insertion")

        logger.info(f"✓ Propriété créée: {result.data[0]['id']}")
        return Property(**result.data[0])

    def get_by_id(self, property_id: str) -> Optional[Property]:
        """Récupérer une annonce par ID"""
        try:
            result = self.db.table(self.table)\
                .select(PROPERTY_SELECT)\
                .eq("id", property_id)\
                .execute()
        except Exception as e:
            logger.error(f"✗ Erreur récupération propriété {property_id}: {e}")
            raise StoreError(str(e)) from e

        if result.data:
            return Property(**result.data[0])
        return None

    def get_all(
        self,
        agent_id: Optional[str] = None,
        project_id: Optional[str] = None,
        limit: Optional[int] = None
    ) -> List[Property]:
        """Collection complète (les filtres fins sont appliqués en mémoire)"""
        try:
            query = self.db.table(self.table).select(PROPERTY_SELECT)

            if agent_id:
                query = query.eq("agent_id", agent_id)
            if project_id:
                query = query.eq("project_id", project_id)

            query = query.order("created_at", desc=True)
            if limit:
                query = query.limit(limit)

            result = query.execute()
        except Exception as e:
            logger.error(f"✗ Erreur récupération propriétés: {e}")
            raise StoreError(str(e)) from e

        return [Property(**item) for item in result.data or []]

    def update(self, property_id: str, property_data: PropertyUpdate) -> Optional[Property]:
        """Mettre à jour une annonce"""
        data = property_data.model_dump(mode="json", exclude_unset=True)
        if not data:
            raise ValueError("Aucune donnée à mettre à jour")

        try:
            result = self.db.table(self.table)\
                .update(data)\
                .eq("id", property_id)\
                .execute()
        except Exception as e:
            logger.error(f"✗ Erreur mise à jour propriété {property_id}: {e}")
            raise StoreError(str(e)) from e

        if result.data:
            logger.info(f"✓ Propriété mise à jour: {property_id}")
            return Property(**result.data[0])
        return None

    def delete(self, property_id: str) -> None:
        """Supprimer une annonce"""
        try:
            self.db.table(self.table).delete().eq("id", property_id).execute()
        except Exception as e:
            logger.error(f"✗ Erreur suppression propriété {property_id}: {e}")
            raise StoreError(str(e)) from e
        logger.info(f"✓ Propriété supprimée: {property_id}")

    def find_by_code(self, code: str) -> Optional[Property]:
        """Annonce portant exactement ce code (insensible à la casse)"""
        try:
            result = self.db.table(self.table)\
                .select(PROPERTY_SELECT)\
                .ilike("property_code", escape_like(code))\
                .execute()
        except Exception as e:
            logger.error(f"✗ Erreur recherche du code {code}: {e}")
            raise StoreError(str(e)) from e

        for item in result.data or []:
            if same_code(item.get("property_code"), code):
                return Property(**item)
        return None

    def code_exists(self, code: str, exclude_id: Optional[str] = None) -> bool:
        """Vrai si un autre bien porte déjà ce code (insensible à la casse)"""
        result = self.db.table(self.table)\
            .select("id, property_code")\
            .ilike("property_code", escape_like(code))\
            .execute()
        return any(
            same_code(item.get("property_code"), code) and item.get("id") != exclude_id
            for item in result.data or []
        )

    def generate_code_rpc(self, base_type: str, is_new: bool) -> Optional[str]:
        """Fonction SQL generate_property_code (compteur par type)"""
        result = self.db.rpc(
            "generate_property_code",
            {"property_type": base_type, "is_new": is_new}
        ).execute()
        return result.data or None


def get_property_crud(db: Client) -> PropertyCRUD:
    return PropertyCRUD(db)
