"""Statistiques du tableau de bord, calculées sur la liste en mémoire"""
from typing import Iterable

from app.models import (
    Property,
    PropertyStats,
    PropertyStatus,
    Requirement,
    RequirementPriority,
    RequirementStats,
    RequirementStatus,
)

HIGH_PRIORITIES = (RequirementPriority.high, RequirementPriority.urgent)


def compute_property_stats(records: Iterable[Property]) -> PropertyStats:
    stats = {"total": 0, "available": 0, "pending": 0, "sold": 0}
    for prop in records:
        stats["total"] += 1
        if prop.status == PropertyStatus.available:
            stats["available"] += 1
        elif prop.status == PropertyStatus.pending:
            stats["pending"] += 1
        elif prop.status == PropertyStatus.sold:
            stats["sold"] += 1
    return PropertyStats(**stats)


def compute_requirement_stats(records: Iterable[Requirement]) -> RequirementStats:
    records = list(records)
    return RequirementStats(
        total=len(records),
        active=sum(1 for r in records if r.status == RequirementStatus.active),
        fulfilled=sum(1 for r in records if r.status == RequirementStatus.fulfilled),
        closed=sum(1 for r in records if r.status == RequirementStatus.closed),
        high_priority=sum(
            1 for r in records
            if r.status == RequirementStatus.active and r.priority in HIGH_PRIORITIES
        ),
        unassigned=sum(1 for r in records if not r.assigned_agent_id),
    )
