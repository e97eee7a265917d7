"""
Gestion des agents (réservée aux administrateurs)
"""
from fastapi import APIRouter, Depends, HTTPException, status
from typing import List
from supabase import Client
import logging
from app.api.deps import require_admin, to_http_exception
from app.core.exceptions import DashboardError
from app.crud import get_profile_crud
from app.db import get_supabase, get_supabase_admin
from app.models import AgentCreate, Profile, ProfileUpdate

router = APIRouter(dependencies=[Depends(require_admin)])
logger = logging.getLogger(__name__)


@router.get("/", response_model=List[Profile])
def list_agents(db: Client = Depends(get_supabase)):
    """Liste des agents triés par nom"""
    try:
        return get_profile_crud(db).list_agents()
    except DashboardError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Erreur récupération agents: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Erreur lors de la récupération des agents"
        )


@router.post("/", response_model=Profile, status_code=status.HTTP_201_CREATED)
def create_agent(
    agent_data: AgentCreate,
    admin_db: Client = Depends(get_supabase_admin)
):
    """Créer le compte et le profil d'un agent"""
    try:
        return get_profile_crud(admin_db).create_agent(agent_data)
    except DashboardError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Erreur création agent {agent_data.email}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Erreur lors de la création de l'agent"
        )


@router.put("/{agent_id}", response_model=Profile)
def update_agent(
    agent_id: str,
    profile_data: ProfileUpdate,
    db: Client = Depends(get_supabase)
):
    try:
        crud = get_profile_crud(db)
        if not crud.exists(agent_id):
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Agent {agent_id} introuvable"
            )
        if not profile_data.model_dump(exclude_unset=True):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Aucune donnée à mettre à jour"
            )
        return crud.update(agent_id, profile_data)
    except HTTPException:
        raise
    except DashboardError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Erreur mise à jour agent {agent_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Erreur lors de la mise à jour de l'agent"
        )


@router.post("/{agent_id}/reset-password", status_code=status.HTTP_202_ACCEPTED)
def reset_agent_password(agent_id: str, db: Client = Depends(get_supabase)):
    """Envoyer l'email de réinitialisation du mot de passe à l'agent"""
    try:
        crud = get_profile_crud(db)
        agent = crud.get_by_id(agent_id)
        if not agent:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Agent {agent_id} introuvable"
            )
        crud.send_password_reset(agent.email)
        return {"message": f"Email de réinitialisation envoyé à {agent.email}"}
    except HTTPException:
        raise
    except DashboardError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Erreur réinitialisation mot de passe {agent_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Erreur lors de l'envoi de l'email"
        )


@router.delete("/{agent_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_agent(agent_id: str, db: Client = Depends(get_supabase)):
    """Supprimer le profil d'un agent"""
    try:
        crud = get_profile_crud(db)
        if not crud.exists(agent_id):
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Agent {agent_id} introuvable"
            )
        crud.delete(agent_id)
        return None
    except HTTPException:
        raise
    except DashboardError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Erreur suppression agent {agent_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Erreur lors de la suppression de l'agent"
        )
