# app/api/v1/endpoints/requirements.py
"""
Routes API pour les besoins clients
"""

from fastapi import APIRouter, Depends, HTTPException, Query, status
from typing import List, Optional
from pydantic import BaseModel
from supabase import Client
import logging
from app.api.deps import get_current_actor, require_admin, to_http_exception
from app.core.config import settings
from app.core.exceptions import DashboardError
from app.crud import get_profile_crud, get_requirement_crud
from app.db import get_supabase
from app.models import (
    Actor, Requirement, RequirementCreate, RequirementUpdate,
    RequirementFilterCriteria, RequirementStatus, Suggestion
)
from app.services.authorization import ensure_can_mutate_requirement
from app.services.property_filters import filter_requirements
from app.services.share_text import ShareFormat, render_requirement_share, whatsapp_share_url
from app.services.suggestions import suggest_requirements

router = APIRouter()
logger = logging.getLogger(__name__)


class AssignAgentRequest(BaseModel):
    agent_id: Optional[str] = None


class RequirementShareResponse(BaseModel):
    format: ShareFormat
    text: str
    whatsapp_url: str


def _get_or_404(crud, requirement_id: str) -> Requirement:
    requirement = crud.get_by_id(requirement_id)
    if not requirement:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Besoin {requirement_id} introuvable"
        )
    return requirement


@router.post("/", response_model=Requirement, status_code=status.HTTP_201_CREATED)
def create_requirement(
    requirement_data: RequirementCreate,
    actor: Actor = Depends(get_current_actor),
    db: Client = Depends(get_supabase)
):
    """
    Créer un besoin client

    - **customer_name / customer_phone**: obligatoires
    - **preferred_locations**: liste des lieux souhaités
    - **priority**: low, medium, high, urgent

    Un agent est automatiquement assigné au besoin qu'il saisit.
    """
    try:
        if not actor.is_admin:
            requirement_data = requirement_data.model_copy(update={"assigned_agent_id": actor.id})
        elif requirement_data.assigned_agent_id and not get_profile_crud(db).exists(requirement_data.assigned_agent_id):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="assigned_agent_id invalide"
            )

        requirement = get_requirement_crud(db).create(requirement_data, created_by=actor.id)
        logger.info(f"Besoin créé: {requirement.id}")
        return requirement
    except HTTPException:
        raise
    except DashboardError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Erreur création besoin: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Erreur lors de la création du besoin: {str(e)}"
        )


@router.get("/", response_model=List[Requirement])
def list_requirements(
    criteria: RequirementFilterCriteria = Depends(),
    assigned_to_me: bool = Query(False, description="Seulement mes besoins"),
    actor: Actor = Depends(get_current_actor),
    db: Client = Depends(get_supabase)
):
    """
    Liste des besoins avec filtres

    Permet de filtrer par:
    - **status**: active, fulfilled, closed
    - **priority**: low, medium, high, urgent
    - **assigned_agent_id**: ID de l'agent assigné
    - **search**: titre, client, téléphone, email, lieux
    """
    try:
        if assigned_to_me:
            criteria = criteria.model_copy(update={"assigned_agent_id": actor.id})
        return filter_requirements(get_requirement_crud(db).get_all(), criteria)
    except DashboardError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Erreur récupération besoins: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Erreur lors de la récupération des besoins"
        )


@router.get("/suggestions", response_model=List[Suggestion])
def requirement_suggestions(
    q: str = Query(""),
    limit: int = Query(settings.SUGGESTIONS_MAX_RESULTS, ge=1, le=50),
    db: Client = Depends(get_supabase)
):
    try:
        return suggest_requirements(get_requirement_crud(db).get_all(), q, limit)
    except DashboardError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Erreur suggestions besoins '{q}': {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Erreur lors du calcul des suggestions"
        )


@router.get("/{requirement_id}", response_model=Requirement)
def get_requirement(requirement_id: str, db: Client = Depends(get_supabase)):
    """Récupérer un besoin par son ID"""
    try:
        return _get_or_404(get_requirement_crud(db), requirement_id)
    except HTTPException:
        raise
    except DashboardError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Erreur récupération besoin {requirement_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Erreur lors de la récupération du besoin"
        )


@router.get("/{requirement_id}/share", response_model=RequirementShareResponse)
def share_requirement(
    requirement_id: str,
    fmt: ShareFormat = Query(ShareFormat.whatsapp, alias="format"),
    db: Client = Depends(get_supabase)
):
    """Texte de partage WhatsApp ou presse-papier"""
    try:
        requirement = _get_or_404(get_requirement_crud(db), requirement_id)
        text = render_requirement_share(requirement, fmt, settings.AGENCY_NAME)
        return RequirementShareResponse(format=fmt, text=text, whatsapp_url=whatsapp_share_url(text))
    except HTTPException:
        raise
    except DashboardError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Erreur texte de partage besoin {requirement_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Erreur lors de la génération du texte de partage"
        )


@router.put("/{requirement_id}", response_model=Requirement)
def update_requirement(
    requirement_id: str,
    requirement_data: RequirementUpdate,
    actor: Actor = Depends(get_current_actor),
    db: Client = Depends(get_supabase)
):
    """
    Mettre à jour un besoin

    Tous les champs sont optionnels. Seuls les champs fournis seront modifiés.
    """
    try:
        crud = get_requirement_crud(db)
        ensure_can_mutate_requirement(actor, _get_or_404(crud, requirement_id))

        if not requirement_data.model_dump(exclude_unset=True):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Aucune donnée à mettre à jour"
            )

        updated = crud.update(requirement_id, requirement_data)
        logger.info(f"Besoin {requirement_id} mis à jour")
        return updated
    except HTTPException:
        raise
    except DashboardError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Erreur mise à jour besoin {requirement_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Erreur lors de la mise à jour du besoin"
        )


@router.patch("/{requirement_id}/status", response_model=Requirement)
def update_requirement_status(
    requirement_id: str,
    new_status: RequirementStatus,
    actor: Actor = Depends(get_current_actor),
    db: Client = Depends(get_supabase)
):
    """
    Mettre à jour uniquement le statut d'un besoin

    Statuts disponibles:
    - active: En recherche
    - fulfilled: Bien trouvé
    - closed: Clôturé
    """
    try:
        crud = get_requirement_crud(db)
        ensure_can_mutate_requirement(actor, _get_or_404(crud, requirement_id))

        updated = crud.update_status(requirement_id, new_status)
        logger.info(f"Statut du besoin {requirement_id} mis à jour: {new_status.value}")
        return updated
    except HTTPException:
        raise
    except DashboardError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Erreur mise à jour statut besoin {requirement_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Erreur lors de la mise à jour du statut"
        )


@router.patch("/{requirement_id}/assign", response_model=Requirement)
def assign_requirement(
    requirement_id: str,
    request: AssignAgentRequest,
    actor: Actor = Depends(require_admin),
    db: Client = Depends(get_supabase)
):
    """Assigner un agent au besoin (admin)"""
    try:
        crud = get_requirement_crud(db)
        _get_or_404(crud, requirement_id)

        if request.agent_id and not get_profile_crud(db).exists(request.agent_id):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="agent_id invalide"
            )

        updated = crud.assign_agent(requirement_id, request.agent_id)
        logger.info(f"Besoin {requirement_id} assigné à {request.agent_id}")
        return updated
    except HTTPException:
        raise
    except DashboardError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Erreur assignation besoin {requirement_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Erreur lors de l'assignation de l'agent"
        )


@router.delete("/{requirement_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_requirement(
    requirement_id: str,
    actor: Actor = Depends(get_current_actor),
    db: Client = Depends(get_supabase)
):
    """
    Supprimer un besoin

    ⚠️ Attention: Cette action est irréversible
    """
    try:
        crud = get_requirement_crud(db)
        ensure_can_mutate_requirement(actor, _get_or_404(crud, requirement_id))

        crud.delete(requirement_id)
        logger.info(f"Besoin {requirement_id} supprimé")
        return None
    except HTTPException:
        raise
    except DashboardError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Erreur suppression besoin {requirement_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Erreur lors de la suppression du besoin"
        )
