"""
Client HTTP de la fonction add-property

Utilisé par les scripts et services externes pour pousser une annonce
vers POST {SUPABASE_URL}/functions/v1/add-property.
"""
import logging
from typing import Any, Dict, Optional

import requests

from app.core.config import settings
from app.core.exceptions import DashboardError

logger = logging.getLogger(__name__)

ADD_PROPERTY_PATH = "/functions/v1/add-property"
DEFAULT_TIMEOUT = 30


class PropertyApiError(DashboardError):
    """Réponse en erreur de la fonction add-property"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


def add_property_via_api(
    property_data: Dict[str, Any],
    token: Optional[str],
    base_url: Optional[str] = None,
    anon_key: Optional[str] = None,
    timeout: int = DEFAULT_TIMEOUT,
    session: Optional[requests.Session] = None
) -> Dict[str, Any]:
    """
    Ajoute une propriété via l'API.

    Args:
        property_data: champs de la propriété (title obligatoire)
        token: JWT de l'utilisateur connecté ou clé API du webhook
        base_url: URL Supabase, SUPABASE_URL par défaut
        anon_key: en-tête apikey, SUPABASE_KEY par défaut

    Returns:
        Le corps de la réponse: {"success", "message", "data"}

    Raises:
        PropertyApiError: authentification absente ou réponse en erreur
    """
    if not token:
        raise PropertyApiError("Aucune authentification disponible: fournir une clé API ou se connecter")

    url = (base_url or settings.SUPABASE_URL).rstrip("/") + ADD_PROPERTY_PATH
    headers = {
        "Content-Type": "application/json",
        "Authorization": f"Bearer {token}",
        "apikey": anon_key or settings.SUPABASE_KEY,
    }

    http = session or requests
    try:
        response = http.post(url, headers=headers, json=property_data, timeout=timeout)
    except requests.RequestException as e:
        logger.error(f"✗ Appel add-property impossible: {e}")
        raise PropertyApiError(f"Appel add-property impossible: {e}") from e

    try:
        result = response.json()
    except ValueError:
        result = {}

    if not response.ok:
        message = result.get("error") if isinstance(result, dict) else None
        logger.error(f"✗ add-property {response.status_code}: {message}")
        raise PropertyApiError(message or "Échec de l'ajout de la propriété", response.status_code)

    logger.info(f"✓ Propriété ajoutée via API: {result.get('data', {}).get('id')}")
    return result


def add_property_via_webhook(
    property_data: Dict[str, Any],
    api_key: str,
    **kwargs
) -> Dict[str, Any]:
    """Ajout avec la clé API partagée (agent_id requis dans property_data)"""
    if not api_key:
        raise PropertyApiError("La clé API est obligatoire pour le webhook")
    return add_property_via_api(property_data, api_key, **kwargs)
