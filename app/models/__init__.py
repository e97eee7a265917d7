# app/models/__init__.py
"""
Modèles Pydantic pour l'API Magixland Dashboard

Modules:
- Property : Annonces immobilières
- Project : Projets (regroupent des propriétés)
- Requirement : Besoins clients
- User : Profils admin / agent et acteur authentifié
- Filters : Critères de liste, suggestions, statistiques
"""

# ====================================
# PROPERTY MODELS
# ====================================
from .property import (
    PropertyStatus,
    PropertyCodeType,
    SourceType,
    ContactDetails,
    ProjectRef,
    AgentRef,
    PropertyBase,
    PropertyCreate,
    PropertyUpdate,
    PropertyWebhookPayload,
    Property
)

# ====================================
# PROJECT MODELS
# ====================================
from .project import (
    ProjectBase,
    ProjectCreate,
    ProjectUpdate,
    Project
)

# ====================================
# REQUIREMENT MODELS
# ====================================
from .requirement import (
    RequirementPriority,
    RequirementStatus,
    RequirementBase,
    RequirementCreate,
    RequirementUpdate,
    Requirement
)

# ====================================
# USER MODELS
# ====================================
from .user import (
    UserRole,
    ProfileBase,
    AgentCreate,
    ProfileUpdate,
    Profile,
    Actor,
    UserLogin,
    PasswordResetRequest,
    TokenResponse
)

# ====================================
# FILTERS / SUGGESTIONS / STATS
# ====================================
from .filters import (
    FOUR_PLUS,
    PropertyFilterCriteria,
    RequirementFilterCriteria,
    Suggestion,
    PropertyStats,
    RequirementStats
)

# ====================================
# EXPORTS
# ====================================
__all__ = [
    # Property
    "PropertyStatus",
    "PropertyCodeType",
    "SourceType",
    "ContactDetails",
    "ProjectRef",
    "AgentRef",
    "PropertyBase",
    "PropertyCreate",
    "PropertyUpdate",
    "PropertyWebhookPayload",
    "Property",

    # Project
    "ProjectBase",
    "ProjectCreate",
    "ProjectUpdate",
    "Project",

    # Requirement
    "RequirementPriority",
    "RequirementStatus",
    "RequirementBase",
    "RequirementCreate",
    "RequirementUpdate",
    "Requirement",

    # User
    "UserRole",
    "ProfileBase",
    "AgentCreate",
    "ProfileUpdate",
    "Profile",
    "Actor",
    "UserLogin",
    "PasswordResetRequest",
    "TokenResponse",

    # Filters
    "FOUR_PLUS",
    "PropertyFilterCriteria",
    "RequirementFilterCriteria",
    "Suggestion",
    "PropertyStats",
    "RequirementStats",
]
