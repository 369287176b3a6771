"""GEDCOM X Definitions — the built-in Person, Search and PersonEntry contracts.

Tests cover:
    - Person: element, namespace, 10 transitions, only "relationship" unconditional
    - Person POST accepts a Gedcomx entity; HEAD/GET conditions differ in wording
    - Search: Feed element, PersonEntry sub-resource, start/count/q parameters
    - Reserved q terms expand relation terms over father/mother/spouse/parent
    - build_gedcomx_registry() is sealed
"""

from rs_contracts.core.domain_types import HttpMethod
from rs_contracts.core.gedcomx_definitions import (
    GEDCOMX_NAMESPACE,
    RELATIONSHIP_REL,
    RS_V1_NAMESPACE,
    SEARCH_QUERY_TERMS,
    SEARCH_REL,
    build_gedcomx_registry,
    search_query_term_names,
)


def test_person_shape(person):
    assert person.namespace == GEDCOMX_NAMESPACE
    assert person.project_id == "gedcomx-rs"
    assert person.resource_element == "Gedcomx"
    assert person.methods == (
        HttpMethod.HEAD, HttpMethod.GET, HttpMethod.POST, HttpMethod.DELETE,
    )
    assert len(person.transitions) == 10


def test_only_relationship_transition_is_unconditional(person):
    unconditional = [t.rel for t in person.transitions if not t.conditional]
    assert unconditional == [RELATIONSHIP_REL]


def test_person_post_takes_gedcomx_entity(person):
    assert person.operation("POST").request_element == "Gedcomx"
    assert person.operation("GET").request_element is None


def test_person_head_and_get_merge_conditions_differ(person):
    head = person.operation(HttpMethod.HEAD).responses[1].condition
    get = person.operation(HttpMethod.GET).responses[1].condition
    assert "merged to" in head
    assert "merged into" in get


def test_search_shape(search):
    assert search.namespace == RS_V1_NAMESPACE
    assert search.resource_element == "Feed"
    assert search.rel == SEARCH_REL
    assert search.subresources == ("PersonEntry",)
    assert [p.name for p in search.parameters] == ["start", "count", "q"]


def test_search_query_terms_expand_relations():
    names = search_query_term_names()
    assert names[: len(SEARCH_QUERY_TERMS)] == list(SEARCH_QUERY_TERMS)
    assert "fatherGivenName" in names
    assert "parentMarriagePlace" in names
    assert len(names) == 9 + 4 * 8


def test_registry_is_sealed_and_closed_world_valid_except_embedded_links():
    registry = build_gedcomx_registry()
    assert registry.sealed
    assert len(registry) == 3
    # Search's sub-resource resolves; only Person's embedded-link targets are external
    unresolved = registry.validate(closed_world=True)
    assert {v.resource for v in unresolved} == {"Person"}
