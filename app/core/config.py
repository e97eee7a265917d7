"""Configuration de l'application Magixland Dashboard"""
from pydantic_settings import BaseSettings
from typing import List, Optional


class Settings(BaseSettings):
    """Paramètres de configuration"""

    # Application
    APP_NAME: str = "Magixland Dashboard"
    VERSION: str = "1.0.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # CORS - URLs autorisées
    CORS_ORIGINS: str = "http://localhost:5173,http://localhost:3000,http://127.0.0.1:3000"

    # Supabase
    SUPABASE_URL: str
    SUPABASE_KEY: str
    SUPABASE_SERVICE_KEY: Optional[str] = None  # service role, sinon SUPABASE_KEY

    # Webhook add-property (clé partagée, désactivée si vide)
    PROPERTY_API_KEY: Optional[str] = None

    # Stockage des images
    STORAGE_BUCKET: str = "property-images"

    # Partage WhatsApp / presse-papier
    AGENCY_NAME: str = "Magixland Real Estate"

    # Autosuggestion
    SUGGESTIONS_MAX_RESULTS: int = 10

    # Génération des codes propriété
    CODE_CHECK_MAX_RETRIES: int = 3
    CODE_CHECK_BACKOFF_SECONDS: float = 0.2

    # Auth
    PASSWORD_RESET_REDIRECT_URL: Optional[str] = None

    @property
    def cors_origins_list(self) -> List[str]:
        """Transforme CORS_ORIGINS en liste"""
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",")]

    @property
    def service_key(self) -> str:
        """Clé utilisée par le client admin"""
        return self.SUPABASE_SERVICE_KEY or self.SUPABASE_KEY

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"


# Instance globale
settings = Settings()
