"""
Contrôle des droits de modification.

Un admin peut tout modifier ; un agent seulement les propriétés dont il est
l'agent (agent_id == son id). Les politiques RLS de Supabase appliquent la
même règle côté base.
"""
from app.core.exceptions import PermissionDeniedError
from app.models import Actor, Property, Requirement


def can_mutate_property(actor: Actor, prop: Property) -> bool:
    if actor.is_admin:
        return True
    return prop.agent_id is not None and prop.agent_id == actor.id


def ensure_can_mutate_property(actor: Actor, prop: Property) -> None:
    if not can_mutate_property(actor, prop):
        raise PermissionDeniedError(
            "Vous n'avez pas la permission de modifier cette propriété"
        )


def can_mutate_requirement(actor: Actor, req: Requirement) -> bool:
    """Admin, créateur ou agent assigné"""
    if actor.is_admin:
        return True
    return actor.id in (req.created_by, req.assigned_agent_id)


def ensure_can_mutate_requirement(actor: Actor, req: Requirement) -> None:
    if not can_mutate_requirement(actor, req):
        raise PermissionDeniedError(
            "Vous n'avez pas la permission de modifier ce besoin"
        )


def ensure_admin(actor: Actor) -> None:
    if not actor.is_admin:
        raise PermissionDeniedError("Action réservée aux administrateurs")
