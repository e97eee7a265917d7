"""
Client Supabase pour l'application.
Gère la connexion à la base de données, à l'auth et au stockage Supabase.

Deux clients sont exposés :
- le client public (clé anon) pour les sessions utilisateurs
- le client admin (service role) pour le webhook et la gestion des agents
"""
from supabase import create_client, Client
from functools import lru_cache
import logging

from app.core.config import settings

logger = logging.getLogger(__name__)


class SupabaseClient:
    """
    Classe wrapper pour le client Supabase.
    Permet une gestion plus flexible de la connexion.
    """

    _instance: Client = None
    _admin_instance: Client = None

    @classmethod
    def get_client(cls) -> Client:
        """
        Retourne l'instance du client Supabase (Singleton).

        Returns:
            Client Supabase configuré
        """
        if cls._instance is None:
            try:
                logger.info("🔌 Initialisation du client Supabase...")

                cls._instance = create_client(
                    supabase_url=settings.SUPABASE_URL,
                    supabase_key=settings.SUPABASE_KEY
                )

                logger.info("✅ Client Supabase initialisé avec succès")

            except Exception as e:
                logger.error(f"❌ Erreur lors de l'initialisation Supabase: {str(e)}")
                raise

        return cls._instance

    @classmethod
    def get_admin_client(cls) -> Client:
        """Retourne le client avec service key (admin)"""
        if cls._admin_instance is None:
            try:
                cls._admin_instance = create_client(
                    supabase_url=settings.SUPABASE_URL,
                    supabase_key=settings.service_key
                )
                logger.info("✅ Client Supabase admin initialisé")
            except Exception as e:
                logger.error(f"❌ Erreur initialisation client admin: {str(e)}")
                raise

        return cls._admin_instance


@lru_cache()
def get_supabase_client() -> Client:
    """
    Retourne une instance du client Supabase.

    Utilise @lru_cache pour créer une seule instance réutilisée.

    Returns:
        Client Supabase configuré

    Raises:
        Exception: Si la configuration Supabase est invalide
    """
    return SupabaseClient.get_client()


def get_supabase() -> Client:
    """
    Dependency FastAPI : client Supabase public.

    Usage:
        @router.get("/endpoint")
        def my_endpoint(db: Client = Depends(get_supabase)):
            ...
    """
    return get_supabase_client()


def get_supabase_admin() -> Client:
    """Dependency FastAPI : client Supabase service role"""
    return SupabaseClient.get_admin_client()


def get_supabase_session() -> Client:
    """
    Dependency FastAPI : client Supabase neuf, propre à la requête.

    À utiliser pour toute opération qui ouvre une session (connexion) :
    supabase-py remplace alors l'en-tête Authorization du client, ce qui ne
    doit jamais toucher le client partagé.
    """
    return create_client(
        supabase_url=settings.SUPABASE_URL,
        supabase_key=settings.SUPABASE_KEY
    )


__all__ = [
    "SupabaseClient",
    "get_supabase_client",
    "get_supabase",
    "get_supabase_admin",
    "get_supabase_session",
]
