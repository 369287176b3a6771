"""Link Check — compares link relations observed on a response with declared transitions.

Invariants:
    - Pure: input is a ResourceDefinition and the set of observed rels
    - A rel not declared as a transition or state rel → UNDECLARED_LINK
    - A non-conditional transition that is absent → MISSING_REQUIRED_LINK,
      unless require_unconditional=False
    - Conditional transitions may be absent (server policy / embedding decides)

Design Decisions:
    - The resource's own state rels and "self" are tolerated
      so servers may echo the canonical link of the resource itself
"""

from collections.abc import Iterable

from rs_contracts.core.contract_model import ResourceDefinition
from rs_contracts.core.domain_types import ContractViolationKind
from rs_contracts.core.violations import ContractViolation

# Generic relations any hypermedia response may carry
UNIVERSAL_RELS: frozenset[str] = frozenset({"self"})


def check_links(
    resource: ResourceDefinition,
    rels_present: Iterable[str],
    require_unconditional: bool = True,
) -> list[ContractViolation]:
    present = list(dict.fromkeys(rels_present))
    declared = {t.rel for t in resource.transitions}
    tolerated = declared | set(resource.state_rels) | UNIVERSAL_RELS

    violations = [
        ContractViolation(
            kind=ContractViolationKind.UNDECLARED_LINK,
            resource=resource.name,
            rel=rel,
            message=f"Link '{rel}' is not declared for resource '{resource.name}'",
        )
        for rel in present if rel not in tolerated
    ]
    if not require_unconditional:
        return violations
    present_set = set(present)
    violations.extend(
        ContractViolation(
            kind=ContractViolationKind.MISSING_REQUIRED_LINK,
            resource=resource.name,
            rel=t.rel,
            message=f"Required link '{t.rel}' missing from resource '{resource.name}'",
        )
        for t in resource.transitions
        if not t.conditional and t.rel not in present_set
    )
    return violations
