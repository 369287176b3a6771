"""Data Element Catalog — the closed set of GEDCOM X element types a contract may name.

Invariants:
    - Transition scopes and resource elements resolve against a catalog, never against classes
    - Identifiers are the simple element names ("Person", "Fact"), case-sensitive
    - Catalogs are frozensets: shared freely, never mutated

Design Decisions:
    - Tagged identifiers over reflective class references: the model stays pure data
    - extend_catalog() builds a new set for documents that add their own element types
"""

from collections.abc import Iterable

from rs_contracts.core.domain_types import DataElementType


# ─── GEDCOM X conceptual model ───────────────────────────────────

CONCLUSION_ELEMENTS: frozenset[str] = frozenset({
    "Person", "Relationship", "Name", "Gender", "Fact",
    "Event", "EventRole", "PlaceDescription", "Document",
})

COMMON_ELEMENTS: frozenset[str] = frozenset({
    "Gedcomx", "Note", "Attribution", "Identifier", "EvidenceReference",
})

SOURCE_ELEMENTS: frozenset[str] = frozenset({
    "SourceReference", "SourceDescription", "SourceCitation",
})

AGENT_ELEMENTS: frozenset[str] = frozenset({"Agent"})

# Atom syndication wrappers used by search and collection resources
ATOM_ELEMENTS: frozenset[str] = frozenset({"Feed", "Entry"})

GEDCOMX_DATA_ELEMENTS: frozenset[str] = (
    CONCLUSION_ELEMENTS | COMMON_ELEMENTS | SOURCE_ELEMENTS
    | AGENT_ELEMENTS | ATOM_ELEMENTS
)


def is_known_element(
    element: str, catalog: frozenset[str] = GEDCOMX_DATA_ELEMENTS,
) -> bool:
    return element in catalog


def unknown_elements(
    elements: Iterable[str], catalog: frozenset[str] = GEDCOMX_DATA_ELEMENTS,
) -> list[DataElementType]:
    """Elements not in the catalog, in input order, without repeats."""
    seen: set[str] = set()
    missing: list[DataElementType] = []
    for element in elements:
        if element not in catalog and element not in seen:
            seen.add(element)
            missing.append(DataElementType(element))
    return missing


def extend_catalog(
    extra: Iterable[str], base: frozenset[str] = GEDCOMX_DATA_ELEMENTS,
) -> frozenset[str]:
    return base | frozenset(extra)
