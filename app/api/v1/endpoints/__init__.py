"""Endpoints API"""
from app.api.v1.endpoints import properties
from app.api.v1.endpoints import projects
from app.api.v1.endpoints import requirements
from app.api.v1.endpoints import agents
from app.api.v1.endpoints import auth
from app.api.v1.endpoints import dashboard

__all__ = ["properties", "projects", "requirements", "agents", "auth", "dashboard"]
