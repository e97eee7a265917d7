# app/crud/__init__.py
"""
Couche CRUD pour l'API Magixland Dashboard

Modules CRUD:
- Property: Annonces immobilières
- Project: Projets
- Requirement: Besoins clients
- Profile: Profils admin / agent et authentification
"""

from .property import PropertyCRUD, get_property_crud
from .project import ProjectCRUD, get_project_crud
from .requirement import RequirementCRUD, get_requirement_crud
from .profile import ProfileCRUD, get_profile_crud

__all__ = [
    # Property CRUD
    "PropertyCRUD",
    "get_property_crud",

    # Project CRUD
    "ProjectCRUD",
    "get_project_crud",

    # Requirement CRUD
    "RequirementCRUD",
    "get_requirement_crud",

    # Profile CRUD
    "ProfileCRUD",
    "get_profile_crud",
]
