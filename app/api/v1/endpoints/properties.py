"""
Routes API pour les annonces immobilières
"""
from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile, status
from typing import List
from pydantic import BaseModel
from supabase import Client
import logging
from app.api.deps import get_current_actor, get_property_service, to_http_exception
from app.core.config import settings
from app.core.exceptions import DashboardError
from app.db import get_supabase
from app.models import (
    Actor, Property, PropertyCodeType, PropertyCreate, PropertyFilterCriteria,
    PropertyUpdate, Suggestion
)
from app.services.property_service import PropertyService
from app.services.share_text import ShareFormat, whatsapp_share_url
from app.services.storage import upload_property_image

router = APIRouter()
logger = logging.getLogger(__name__)


class GenerateCodeRequest(BaseModel):
    property_code_type: PropertyCodeType


class GeneratedCode(BaseModel):
    property_code_type: PropertyCodeType
    property_code: str


class ShareTextResponse(BaseModel):
    format: ShareFormat
    text: str
    whatsapp_url: str


class ImageUploadResponse(BaseModel):
    url: str


@router.get("/", response_model=List[Property])
def list_properties(
    criteria: PropertyFilterCriteria = Depends(),
    service: PropertyService = Depends(get_property_service)
):
    """
    Liste des annonces filtrées

    - **status**: available, pending, sold
    - **property_code_type**: New Apartment, Old House, Site...
    - **bedrooms / bathrooms**: nombre exact ou "4+"
    - **min_/max_price, min_/max_area, min_/max_price_per_sqft**: bornes inclusives
    - **search**: texte libre (titre, code, projet, adresse, agent, propriétaire...)
    """
    try:
        return service.list_filtered(criteria)
    except DashboardError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Erreur lors de la récupération des annonces: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Erreur lors de la récupération des annonces"
        )


@router.get("/suggestions", response_model=List[Suggestion])
def property_suggestions(
    q: str = Query("", description="Texte saisi"),
    limit: int = Query(settings.SUGGESTIONS_MAX_RESULTS, ge=1, le=50),
    service: PropertyService = Depends(get_property_service)
):
    """Suggestions pour la barre de recherche"""
    try:
        return service.suggest(q, limit)
    except DashboardError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Erreur suggestions '{q}': {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Erreur lors du calcul des suggestions"
        )


@router.post("/generate-code", response_model=GeneratedCode)
def generate_property_code(
    request: GenerateCodeRequest,
    service: PropertyService = Depends(get_property_service)
):
    """Proposer un code propriété pour le type choisi dans le formulaire"""
    try:
        code = service.generate_code(request.property_code_type.value)
        return GeneratedCode(property_code_type=request.property_code_type, property_code=code)
    except DashboardError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Erreur génération code {request.property_code_type}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Erreur lors de la génération du code"
        )


@router.post("/images", response_model=ImageUploadResponse, status_code=201)
def upload_image(
    file: UploadFile = File(...),
    actor: Actor = Depends(get_current_actor),
    db: Client = Depends(get_supabase)
):
    """Envoyer une image et obtenir son URL publique"""
    try:
        url = upload_property_image(
            db,
            content=file.file.read(),
            filename=file.filename or "",
            folder=actor.role.value,
            content_type=file.content_type
        )
        return ImageUploadResponse(url=url)
    except DashboardError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Erreur upload image: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Erreur lors de l'envoi de l'image"
        )


@router.post("/", response_model=Property, status_code=201)
def create_property(
    property_data: PropertyCreate,
    actor: Actor = Depends(get_current_actor),
    service: PropertyService = Depends(get_property_service)
):
    """Créer une nouvelle annonce (code généré si seul le type est fourni)"""
    try:
        return service.create(actor, property_data)
    except DashboardError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Erreur lors de la création de l'annonce: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Erreur lors de la création de l'annonce"
        )


@router.get("/code/{property_code}", response_model=Property)
def get_property_by_code(
    property_code: str,
    service: PropertyService = Depends(get_property_service)
):
    """Retrouver une annonce par son code (NA007, s000042...)"""
    try:
        return service.get_by_code(property_code)
    except DashboardError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Erreur recherche du code {property_code}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Erreur lors de la recherche de l'annonce"
        )


@router.get("/{property_id}", response_model=Property)
def get_property(
    property_id: str,
    service: PropertyService = Depends(get_property_service)
):
    """Récupérer une annonce par son ID"""
    try:
        return service.get(property_id)
    except DashboardError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Erreur lors de la récupération de l'annonce {property_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Erreur lors de la récupération de l'annonce"
        )


@router.get("/{property_id}/share", response_model=ShareTextResponse)
def share_property(
    property_id: str,
    fmt: ShareFormat = Query(ShareFormat.whatsapp, alias="format"),
    service: PropertyService = Depends(get_property_service)
):
    """Texte de partage WhatsApp ou presse-papier"""
    try:
        text = service.share_text(property_id, fmt)
        return ShareTextResponse(format=fmt, text=text, whatsapp_url=whatsapp_share_url(text))
    except DashboardError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Erreur texte de partage {property_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Erreur lors de la génération du texte de partage"
        )


@router.put("/{property_id}", response_model=Property)
def update_property(
    property_id: str,
    property_data: PropertyUpdate,
    actor: Actor = Depends(get_current_actor),
    service: PropertyService = Depends(get_property_service)
):
    """Mettre à jour une annonce (admin ou agent propriétaire)"""
    try:
        updated_property = service.update(actor, property_id, property_data)
        logger.info(f"Annonce {property_id} mise à jour avec succès")
        return updated_property
    except DashboardError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Erreur lors de la mise à jour de l'annonce {property_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Erreur lors de la mise à jour de l'annonce"
        )


@router.delete("/{property_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_property(
    property_id: str,
    actor: Actor = Depends(get_current_actor),
    service: PropertyService = Depends(get_property_service)
):
    """Supprimer une annonce (admin ou agent propriétaire)"""
    try:
        service.delete(actor, property_id)
        logger.info(f"Annonce {property_id} supprimée avec succès")
        return None  # 204 No Content
    except DashboardError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Erreur lors de la suppression de l'annonce {property_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Erreur lors de la suppression de l'annonce"
        )
