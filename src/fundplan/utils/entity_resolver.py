"""Utility for resolving entity names to IDs."""

from typing import Iterable, Protocol


class Named(Protocol):
    id: int
    name: str


def resolve_entity(entities: Iterable[Named], reference: str | int, kind: str = "Entity") -> int:
    """Resolve an entity name or ID to its ID.

    Args:
        entities: Candidate entities (anything with id and name)
        reference: Entity name (str) or ID (int or string representation of int)
        kind: Entity kind used in error messages (e.g. "Account")

    Returns:
        Entity ID

    Raises:
        ValueError: If no entity matches
    """
    entities = list(entities)

    if isinstance(reference, int):
        if any(e.id == reference for e in entities):
            return reference
        raise ValueError(f"{kind} ID {reference} not found")

    reference = reference.strip()

    # Exact name match wins over numeric interpretation
    for entity in entities:
        if entity.name == reference:
            return entity.id

    try:
        entity_id = int(reference)
    except ValueError:
        raise ValueError(f"{kind} '{reference}' not found")

    if any(e.id == entity_id for e in entities):
        return entity_id
    raise ValueError(f"{kind} ID {entity_id} not found")
