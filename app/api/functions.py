"""
Fonction d'ajout de propriété appelée par les intégrations externes

POST /functions/v1/add-property
Les erreurs sont renvoyées sous la forme {"error": "..."}.
"""
from fastapi import APIRouter, Depends, Header, Request, status
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from typing import Optional
from supabase import Client
import logging
from app.api.deps import status_for
from app.core.config import settings
from app.core.exceptions import DashboardError, ValidationFailedError
from app.db import get_supabase_admin
from app.models import PropertyWebhookPayload
from app.services.property_intake import PropertyIntakeService, extract_bearer_token

router = APIRouter()
logger = logging.getLogger(__name__)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


@router.post("/add-property", status_code=status.HTTP_201_CREATED)
async def add_property(
    request: Request,
    authorization: Optional[str] = Header(None),
    admin_db: Client = Depends(get_supabase_admin)
):
    """
    Ajouter une propriété depuis un système externe

    - **Authorization**: `Bearer <jeton utilisateur>` ou `Bearer <clé API>`
    - **title**: obligatoire
    - **agent_id**: obligatoire avec une clé API
    - **property_code**: généré si absent et que property_code_type est fourni
    """
    try:
        token = extract_bearer_token(authorization)

        try:
            body = await request.json()
        except ValueError:
            raise ValidationFailedError("Corps JSON invalide")
        if not isinstance(body, dict):
            raise ValidationFailedError("Le corps doit être un objet JSON")

        payload = PropertyWebhookPayload.model_validate(body)
        service = PropertyIntakeService.from_db(admin_db, api_key=settings.PROPERTY_API_KEY)
        data = await run_in_threadpool(service.add_property, token, payload)

    except ValidationError as e:
        return _error(status.HTTP_400_BAD_REQUEST, f"Données invalides: {e.errors()[0]['msg']}")
    except DashboardError as e:
        code = status_for(e)
        if code >= 500:
            logger.error(f"✗ Ajout de propriété via API: {e}")
        return _error(code, str(e))
    except Exception as e:
        logger.error(f"✗ Erreur inattendue ajout de propriété via API: {e}")
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Erreur interne du serveur")

    return JSONResponse(
        status_code=status.HTTP_201_CREATED,
        content={"success": True, "message": "Propriété ajoutée avec succès", "data": data}
    )
