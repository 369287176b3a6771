"""GEDCOM X RS Definitions — the Person and Search resource contracts.

Invariants:
    - Conditions, codes and transitions mirror the published resource definitions verbatim
    - Person carries 10 transitions; only "relationship" is unconditional
    - Search declares 400 twice (two distinct conditions) and warning 299
    - build_gedcomx_registry() returns a sealed registry

Design Decisions:
    - Link relations live here as module constants so documents and tests share them
    - PersonEntry is registered so Search's sub-resource reference resolves under
      closed-world validation
"""

from rs_contracts.core.contract_builder import ResourceBuilder
from rs_contracts.core.contract_model import ResourceDefinition
from rs_contracts.core.contract_registry import ContractRegistry
from rs_contracts.core.domain_types import HttpMethod


# ─── Namespaces & project ────────────────────────────────────────

GEDCOMX_NAMESPACE = "http://gedcomx.org/v1/"
RS_V1_NAMESPACE = "http://gedcomx.org/rs/v1/"
RS_PROJECT_ID = "gedcomx-rs"
GEDCOMX_LINK_REL_PREFIX = "http://gedcomx.org/links/"


# ─── Link relations ──────────────────────────────────────────────

PERSON_REL = "person"
SEARCH_REL = GEDCOMX_LINK_REL_PREFIX + "search"
PERSON_ENTRY_REL = GEDCOMX_LINK_REL_PREFIX + "person-entry"
CONCLUSION_REL = "conclusion"
CONCLUSIONS_REL = "conclusions"
SOURCE_REFERENCE_REL = "source-reference"
SOURCE_REFERENCES_REL = "source-references"
NOTE_REL = "note"
NOTES_REL = "notes"
RELATIONSHIP_REL = "relationship"
SPOUSE_RELATIONSHIPS_REL = "spouse-relationships"
CHILD_RELATIONSHIPS_REL = "child-relationships"
PARENT_RELATIONSHIPS_REL = "parent-relationships"


# ─── Search query syntax ─────────────────────────────────────────

SEARCH_QUERY_TERMS: dict[str, str] = {
    "givenName": "The given name of the person being searched.",
    "surname": "The family name of the person being searched.",
    "gender": 'The gender of the person being searched. Valid values are "male" and "female".',
    "birthDate": "The birth date of the person being searched.",
    "birthPlace": "The birth place of the person being searched.",
    "deathDate": "The death date of the person being searched.",
    "deathPlace": "The death place of the person being searched.",
    "marriageDate": "The marriage date of the person being searched.",
    "marriagePlace": "The marriage place of the person being searched.",
}

SEARCH_RELATIONS = ("father", "mother", "spouse", "parent")

_RELATION_TERM_SUFFIXES = (
    "GivenName", "Surname", "BirthDate", "BirthPlace",
    "DeathDate", "DeathPlace", "MarriageDate", "MarriagePlace",
)


def search_query_term_names() -> list[str]:
    """Every reserved term of the `q` parameter, relation terms expanded."""
    names = list(SEARCH_QUERY_TERMS)
    for relation in SEARCH_RELATIONS:
        names.extend(relation + suffix for suffix in _RELATION_TERM_SUFFIXES)
    return names


# ─── Resources ───────────────────────────────────────────────────

def person_definition() -> ResourceDefinition:
    builder = ResourceBuilder("Person", GEDCOMX_NAMESPACE, RS_PROJECT_ID, "Gedcomx")
    builder.describe(
        "The person resource defines the interface for a person, including the "
        "components of a person such as the person's names, gender, facts, source "
        "references, and notes, and the relationships in which the person is a member."
    )
    (
        builder.state("Person", PERSON_REL, "A person.")
        .transition(CONCLUSION_REL, "A conclusion.", ("Name", "Gender", "Fact"), conditional=True)
        .transition(CONCLUSIONS_REL, "The conclusions for the person (embedded link).", "Person", conditional=True)
        .transition(SOURCE_REFERENCES_REL, "The source references for the person (embedded link).", "Person", conditional=True)
        .transition(SOURCE_REFERENCE_REL, "A source reference.", "SourceReference", conditional=True)
        .transition(NOTES_REL, "The notes for the person (embedded link).", "Person", conditional=True)
        .transition(NOTE_REL, "A note.", "Note", conditional=True)
        .transition(RELATIONSHIP_REL, "A relationship.", "Relationship")
        .transition(SPOUSE_RELATIONSHIPS_REL, "The relationships to the spouses of the person (embedded link).", "Person", conditional=True)
        .transition(CHILD_RELATIONSHIPS_REL, "The relationships to the children of the person (embedded link).", "Person", conditional=True)
        .transition(PARENT_RELATIONSHIPS_REL, "The relationships to the parents of the person (embedded link).", "Person", conditional=True)
    )
    (
        builder.operation(HttpMethod.HEAD, "Read a person header attributes.")
        .responds(200, "Upon a successful read.")
        .responds(301, "If the requested person has been merged to another person.")
        .responds(404, "If the requested person is not found.")
        .responds(410, "If the requested person has been deleted.")
    )
    (
        builder.operation(HttpMethod.GET, "Read a person.")
        .responds(200, "Upon a successful read.")
        .responds(301, "If the requested person has been merged into another person.")
        .responds(404, "If the requested person is not found.")
        .responds(410, "If the requested person has been deleted.")
    )
    (
        builder.operation(HttpMethod.POST, "Update a person.", request_element="Gedcomx")
        .responds(204, "The update was successful.")
        .responds(404, "If the requested person is not found.")
        .responds(410, "If the requested person has been deleted.")
    )
    (
        builder.operation(HttpMethod.DELETE, "Delete a person.")
        .responds(204, "The delete was successful.")
        .responds(404, "If the requested person is not found.")
        .responds(410, "If the requested person has already been deleted.")
    )
    return builder.build()


def search_definition() -> ResourceDefinition:
    builder = ResourceBuilder("Search", RS_V1_NAMESPACE, RS_PROJECT_ID, "Feed")
    builder.describe(
        "The search resource defines the set of entries in the system that are "
        "applicable to specific search criteria."
    )
    builder.state("Search", SEARCH_REL, "The results of a search.")
    (
        builder.operation(HttpMethod.GET, "Read the results of a search.")
        .responds(200, "Upon a successful read.")
        .responds(204, "Upon a successful query with no results.")
        .responds(400, "If the query to be processed was unable to be understood by the application.")
        .responds(400, "If the application declines to process the query because it would have resulted in too many results.")
        .warns(299, "If part or all of the query is unable to be processed.")
    )
    builder.subresource("PersonEntry")
    builder.parameter("start", "The index of the first search result desired by the search client.")
    builder.parameter("count", "The number of search results per page desired by the search client.")
    builder.parameter(
        "q",
        "The query parameter describing the search criteria, as whitespace-separated "
        "name:value pairs. Values containing whitespace are double-quoted; a trailing "
        "'~' requests a non-exact match. Reserved names: "
        + ", ".join(search_query_term_names()) + ".",
    )
    return builder.build()


def person_entry_definition() -> ResourceDefinition:
    builder = ResourceBuilder("PersonEntry", RS_V1_NAMESPACE, RS_PROJECT_ID, "Entry")
    builder.describe("A person entry within a search result feed.")
    (
        builder.state("PersonEntry", PERSON_ENTRY_REL, "A search result entry for a person.")
        .transition(PERSON_REL, "The person described by the entry.", "Entry")
    )
    return builder.build()


def build_gedcomx_registry() -> ContractRegistry:
    registry = ContractRegistry()
    registry.register(person_definition())
    registry.register(search_definition())
    registry.register(person_entry_definition())
    return registry.seal()
