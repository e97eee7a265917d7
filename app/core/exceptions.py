"""Hiérarchie d'exceptions métier du dashboard."""


class DashboardError(Exception):
    """Exception de base pour toutes les erreurs métier."""


class ValidationFailedError(DashboardError):
    """Champ obligatoire manquant ou référence invalide (400)."""


class NotFoundError(DashboardError):
    """Enregistrement introuvable (404)."""


class PermissionDeniedError(DashboardError):
    """L'acteur n'a pas le droit de modifier cet enregistrement (403)."""


class StoreError(DashboardError):
    """Erreur remontée par Supabase (base, auth ou stockage)."""


class PropertyCodeError(DashboardError):
    """Impossible de proposer un code propriété dont l'unicité est vérifiée."""


class AuthenticationError(DashboardError):
    """Jeton absent ou invalide (401)."""
