"""
Dépendances FastAPI communes : client Supabase, acteur authentifié,
services, et conversion des erreurs métier en HTTPException.
"""
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from supabase import Client
import logging

from app.core.exceptions import (
    AuthenticationError,
    DashboardError,
    NotFoundError,
    PermissionDeniedError,
    PropertyCodeError,
    StoreError,
    ValidationFailedError,
)
from app.crud import get_profile_crud
from app.db import get_supabase
from app.models import Actor
from app.services.property_service import PropertyService

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)

ERROR_STATUS = {
    ValidationFailedError: status.HTTP_400_BAD_REQUEST,
    AuthenticationError: status.HTTP_401_UNAUTHORIZED,
    PermissionDeniedError: status.HTTP_403_FORBIDDEN,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    PropertyCodeError: status.HTTP_503_SERVICE_UNAVAILABLE,
    StoreError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def status_for(error: DashboardError) -> int:
    for error_type, code in ERROR_STATUS.items():
        if isinstance(error, error_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def to_http_exception(error: DashboardError) -> HTTPException:
    """Erreur métier -> HTTPException avec le message lisible"""
    return HTTPException(status_code=status_for(error), detail=str(error))


def get_current_actor(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
    db: Client = Depends(get_supabase)
) -> Actor:
    """Acteur (Admin ou Agent) à partir du JWT Supabase"""
    if not credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentification requise"
        )

    crud = get_profile_crud(db)
    user_id = crud.user_id_from_token(credentials.credentials)
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Jeton d'autorisation invalide"
        )

    profile = crud.get_by_id(user_id)
    if not profile:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Profil introuvable"
        )
    return Actor(id=profile.id, role=profile.role)


def require_admin(actor: Actor = Depends(get_current_actor)) -> Actor:
    if not actor.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Action réservée aux administrateurs"
        )
    return actor


def get_property_service(db: Client = Depends(get_supabase)) -> PropertyService:
    return PropertyService.from_db(db)
