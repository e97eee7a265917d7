"""Upload des images de propriétés dans le bucket Supabase Storage"""
import logging
import time
import uuid
from typing import Optional

from supabase import Client

from app.core.config import settings
from app.core.exceptions import StoreError, ValidationFailedError

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = {"jpg", "jpeg", "png", "webp", "gif"}


def image_path(folder: str, filename: str) -> str:
    """<dossier>/<timestamp ms>-<aléatoire>.<ext>"""
    if "." not in filename:
        raise ValidationFailedError(f"Fichier sans extension: {filename}")
    ext = filename.rsplit(".", 1)[-1].lower()
    if ext not in ALLOWED_EXTENSIONS:
        raise ValidationFailedError(f"Extension non autorisée: {ext}")
    return f"{folder}/{int(time.time() * 1000)}-{uuid.uuid4().hex[:8]}.{ext}"


def upload_property_image(
    db: Client,
    content: bytes,
    filename: str,
    folder: str,
    content_type: Optional[str] = None,
    bucket: Optional[str] = None
) -> str:
    """Envoie le fichier et retourne son URL publique"""
    if not content:
        raise ValidationFailedError("Fichier vide")

    path = image_path(folder, filename)
    storage = db.storage.from_(bucket or settings.STORAGE_BUCKET)
    try:
        storage.upload(path, content, {"content-type": content_type or "application/octet-stream"})
        url = storage.get_public_url(path)
    except Exception as e:
        logger.error(f"✗ Erreur upload image {path}: {e}")
        raise StoreError(str(e)) from e

    logger.info(f"✓ Image envoyée: {path}")
    return url
