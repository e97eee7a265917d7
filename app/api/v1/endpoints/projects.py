"""
Routes API pour les projets
"""
from fastapi import APIRouter, Depends, HTTPException, status
from typing import List
from supabase import Client
import logging
from app.api.deps import get_current_actor, to_http_exception
from app.core.exceptions import DashboardError
from app.crud import get_project_crud
from app.db import get_supabase
from app.models import Actor, Project, ProjectCreate, ProjectUpdate

router = APIRouter()
logger = logging.getLogger(__name__)


def _ensure_can_mutate(actor: Actor, project: Project) -> None:
    if not actor.is_admin and project.created_by != actor.id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Vous n'avez pas la permission de modifier ce projet"
        )


@router.get("/", response_model=List[Project])
def list_projects(db: Client = Depends(get_supabase)):
    """Liste des projets, plus récents en premier"""
    try:
        return get_project_crud(db).get_all()
    except DashboardError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Erreur récupération projets: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Erreur lors de la récupération des projets"
        )


@router.post("/", response_model=Project, status_code=status.HTTP_201_CREATED)
def create_project(
    project_data: ProjectCreate,
    actor: Actor = Depends(get_current_actor),
    db: Client = Depends(get_supabase)
):
    """Créer un projet"""
    try:
        return get_project_crud(db).create(project_data, created_by=actor.id)
    except DashboardError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Erreur création projet: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Erreur lors de la création du projet"
        )


@router.get("/{project_id}", response_model=Project)
def get_project(project_id: str, db: Client = Depends(get_supabase)):
    try:
        project = get_project_crud(db).get_by_id(project_id)
        if not project:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Projet {project_id} non trouvé"
            )
        return project
    except HTTPException:
        raise
    except DashboardError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Erreur récupération projet {project_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Erreur lors de la récupération du projet"
        )


@router.put("/{project_id}", response_model=Project)
def update_project(
    project_id: str,
    project_data: ProjectUpdate,
    actor: Actor = Depends(get_current_actor),
    db: Client = Depends(get_supabase)
):
    """Mettre à jour un projet (admin ou créateur)"""
    try:
        crud = get_project_crud(db)

        existing = crud.get_by_id(project_id)
        if not existing:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Projet {project_id} non trouvé"
            )
        _ensure_can_mutate(actor, existing)

        if not project_data.model_dump(exclude_unset=True):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Aucune donnée à mettre à jour"
            )

        return crud.update(project_id, project_data)
    except HTTPException:
        raise
    except DashboardError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Erreur mise à jour projet {project_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Erreur lors de la mise à jour du projet"
        )


@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_project(
    project_id: str,
    actor: Actor = Depends(get_current_actor),
    db: Client = Depends(get_supabase)
):
    """
    Supprimer un projet

    ⚠️ Les propriétés du projet sont supprimées en cascade
    """
    try:
        crud = get_project_crud(db)

        existing = crud.get_by_id(project_id)
        if not existing:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Projet {project_id} non trouvé"
            )
        _ensure_can_mutate(actor, existing)

        crud.delete(project_id)
        return None
    except HTTPException:
        raise
    except DashboardError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Erreur suppression projet {project_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Erreur lors de la suppression du projet"
        )
