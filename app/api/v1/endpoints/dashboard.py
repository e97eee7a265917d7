"""Tableau de bord : compteurs et derniers ajouts"""
from fastapi import APIRouter, Depends, HTTPException, status
from typing import List
from pydantic import BaseModel
from supabase import Client
import logging
from app.api.deps import to_http_exception
from app.core.exceptions import DashboardError
from app.crud import get_property_crud, get_requirement_crud
from app.db import get_supabase
from app.models import Property, PropertyStats, Requirement, RequirementStats
from app.services.stats import compute_property_stats, compute_requirement_stats

router = APIRouter()
logger = logging.getLogger(__name__)

RECENT_LIMIT = 5


class DashboardSummary(BaseModel):
    properties: PropertyStats
    requirements: RequirementStats
    recent_properties: List[Property]
    recent_requirements: List[Requirement]


@router.get("/", response_model=DashboardSummary)
def dashboard_summary(db: Client = Depends(get_supabase)):
    """Compteurs par statut et 5 derniers biens / besoins"""
    try:
        properties = get_property_crud(db).get_all()
        requirements = get_requirement_crud(db).get_all()
        return DashboardSummary(
            properties=compute_property_stats(properties),
            requirements=compute_requirement_stats(requirements),
            recent_properties=properties[:RECENT_LIMIT],
            recent_requirements=requirements[:RECENT_LIMIT],
        )
    except DashboardError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Erreur tableau de bord: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Erreur lors du chargement du tableau de bord"
        )
