"""Connexion, mot de passe oublié et profil courant"""
from fastapi import APIRouter, Depends, HTTPException, status
from supabase import Client
import logging
from app.api.deps import get_current_actor, to_http_exception
from app.core.exceptions import DashboardError
from app.crud import get_profile_crud
from app.db import get_supabase, get_supabase_session
from app.models import Actor, PasswordResetRequest, Profile, TokenResponse, UserLogin

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/login", response_model=TokenResponse)
def login(credentials: UserLogin, db: Client = Depends(get_supabase_session)):
    """Connexion email / mot de passe (client éphémère, la session reste locale à la requête)"""
    try:
        session, profile = get_profile_crud(db).sign_in(credentials.email, credentials.password)
        logger.info(f"✓ Connexion: {profile.email} ({profile.role.value})")
        return TokenResponse(
            access_token=session.access_token,
            refresh_token=session.refresh_token,
            user=profile
        )
    except DashboardError as e:
        # Identifiants invalides -> 401 plutôt que 400
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e))
    except Exception as e:
        logger.error(f"Erreur connexion {credentials.email}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Erreur lors de la connexion"
        )


@router.post("/forgot-password", status_code=status.HTTP_202_ACCEPTED)
def forgot_password(request: PasswordResetRequest, db: Client = Depends(get_supabase)):
    """Envoyer un email de réinitialisation"""
    try:
        get_profile_crud(db).send_password_reset(request.email)
        return {"message": "Si le compte existe, un email de réinitialisation a été envoyé"}
    except DashboardError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Erreur mot de passe oublié {request.email}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Erreur lors de l'envoi de l'email"
        )


@router.get("/me", response_model=Profile)
def me(actor: Actor = Depends(get_current_actor), db: Client = Depends(get_supabase)):
    """Profil de l'utilisateur connecté"""
    try:
        profile = get_profile_crud(db).get_by_id(actor.id)
        if not profile:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Profil introuvable")
        return profile
    except HTTPException:
        raise
    except DashboardError as e:
        raise to_http_exception(e)
