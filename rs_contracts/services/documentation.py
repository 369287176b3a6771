"""Documentation Generator — renders the contract registry as Markdown.

Invariants:
    - Output is deterministic: registration order, declaration order, no timestamps
    - Every declared outcome, warning, transition and parameter appears exactly once
    - Pipe characters inside text are escaped so tables never break

Design Decisions:
    - Plain string building over a template engine: the tables are fixed-shape
"""

from rs_contracts.core.contract_model import OperationDefinition, ResourceDefinition
from rs_contracts.core.contract_registry import ContractRegistry


def render_markdown(registry: ContractRegistry, title: str = "API Resources") -> str:
    lines = [f"# {title}", ""]
    for definition in registry:
        lines.append(f"- [{definition.name}](#{_anchor(definition.name)})")
    lines.append("")
    for definition in registry:
        lines.extend(_resource_lines(definition))
    return "\n".join(lines).rstrip() + "\n"


def render_resource_markdown(definition: ResourceDefinition) -> str:
    return "\n".join(_resource_lines(definition)).rstrip() + "\n"


def _resource_lines(d: ResourceDefinition) -> list[str]:
    lines = [f"## {d.name}", ""]
    if d.description:
        lines += [d.description, ""]
    lines += [
        f"- Namespace: `{d.namespace}`",
        f"- Project: `{d.project_id}`",
        f"- Data element: `{d.resource_element}`",
    ]
    if d.rel:
        lines.append(f"- Link relation: `{d.rel}`")
    if d.subresources:
        lines.append("- Sub-resources: " + ", ".join(f"`{s}`" for s in d.subresources))
    lines.append("")

    for op in d.operations:
        lines.extend(_operation_lines(op))

    if d.transitions:
        lines += [
            "### Transitions", "",
            "| rel | description | scope | conditional |",
            "| --- | --- | --- | --- |",
        ]
        for t in d.transitions:
            scope = ", ".join(t.scope) or "(none)"
            lines.append(
                f"| `{t.rel}` | {_cell(t.description)} | {scope} | "
                f"{'yes' if t.conditional else 'no'} |"
            )
        lines.append("")

    if d.parameters:
        lines += ["### Parameters", "", "| name | description |", "| --- | --- |"]
        for p in d.parameters:
            lines.append(f"| `{p.name}` | {_cell(p.description)} |")
        lines.append("")
    return lines


def _operation_lines(op: OperationDefinition) -> list[str]:
    lines = [f"### {op.method.value}", ""]
    if op.description:
        lines += [op.description, ""]
    if op.request_element:
        lines += [f"Request entity: `{op.request_element}`", ""]
    lines += ["| code | condition |", "| --- | --- |"]
    lines += [f"| {o.code} | {_cell(o.condition)} |" for o in op.responses]
    lines.append("")
    if op.warnings:
        lines += ["Warnings:", "", "| code | condition |", "| --- | --- |"]
        lines += [f"| {o.code} | {_cell(o.condition)} |" for o in op.warnings]
        lines.append("")
    return lines


def _cell(text: str) -> str:
    return text.replace("|", "\\|").replace("\n", " ")


def _anchor(name: str) -> str:
    return name.lower().replace(" ", "-")
