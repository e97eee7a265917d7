"""Router API principal v1"""
from fastapi import APIRouter, Depends
from app.api.deps import get_current_actor
from app.api.v1.endpoints import properties, projects, requirements, agents, auth, dashboard

# Créer le router principal
api_router = APIRouter()

# Toutes les routes sauf /auth exigent une session
protected = [Depends(get_current_actor)]

# ==================== AUTH ====================
api_router.include_router(
    auth.router,
    prefix="/auth",
    tags=["Auth"]
)

# ==================== DASHBOARD ====================
api_router.include_router(
    dashboard.router,
    prefix="/dashboard",
    tags=["Dashboard"],
    dependencies=protected
)

# ==================== PROPERTIES ====================
api_router.include_router(
    properties.router,
    prefix="/properties",
    tags=["Properties"],
    dependencies=protected
)

# ==================== PROJECTS ====================
api_router.include_router(
    projects.router,
    prefix="/projects",
    tags=["Projects"],
    dependencies=protected
)

# ==================== REQUIREMENTS ====================
api_router.include_router(
    requirements.router,
    prefix="/requirements",
    tags=["Requirements"],
    dependencies=protected
)

# ==================== AGENTS ====================
api_router.include_router(
    agents.router,
    prefix="/agents",
    tags=["Agents"]
)
