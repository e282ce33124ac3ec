"""Markdown catalog generation from a built registry."""

from typing import Any

from .registry import Registry


def _resolve(spec: dict[str, Any], defs: dict[str, Any]) -> dict[str, Any]:
    ref = spec.get("$ref")
    if ref:
        return defs.get(ref.split("/")[-1], {})
    any_of = spec.get("anyOf")
    if any_of:
        for option in any_of:
            if option.get("type") != "null":
                return {**_resolve(option, defs), "nullable": True}
    return spec


def _param_line(param_name: str, spec: dict[str, Any], required: bool, defs: dict) -> str:
    spec = _resolve(spec, defs)
    ptype = spec.get("type", "object" if "properties" in spec else "any")
    desc_parts = [f"{param_name}: {ptype}, {'required' if required else 'optional'}"]

    if spec.get("nullable"):
        desc_parts.append("nullable")
    if "enum" in spec:
        desc_parts.append(f"one of {spec['enum']}")
    if "minimum" in spec:
        desc_parts.append(f"min {spec['minimum']}")
    if "maximum" in spec:
        desc_parts.append(f"max {spec['maximum']}")
    if "minItems" in spec:
        desc_parts.append(f"at least {spec['minItems']} items")
    if "maxItems" in spec:
        desc_parts.append(f"at most {spec['maxItems']} items")

    return f"- {', '.join(desc_parts)}"


def generate_catalog_markdown(registry: Registry, name: str, description: str) -> str:
    """
    Generate a markdown catalog of everything the registry exposes.

    Args:
        registry: The built registry
        name: Server name (e.g., "spotr")
        description: One-line server description

    Returns:
        Markdown string listing tools, resources and prompts
    """
    lines = [
        "---",
        f"name: {name}",
        f"description: {description}",
        "---",
        "",
        f"# {name.replace('-', ' ').title()}",
        "",
        "## Tools",
        "",
    ]

    for tool in registry.tools.values():
        hints = tool.annotations
        flags = []
        if hints.read_only:
            flags.append("read-only")
        if hints.destructive:
            flags.append("destructive")
        if hints.idempotent:
            flags.append("idempotent")

        lines.append(f"### {tool.name}")
        lines.append(f"{tool.title}" + (f" ({', '.join(flags)})" if flags else ""))
        lines.append("")

        schema = tool.input_schema()
        properties = schema.get("properties", {})
        if properties:
            required = set(schema.get("required", []))
            defs = schema.get("$defs", {})
            lines.append("**Params:**")
            for param_name, spec in properties.items():
                lines.append(_param_line(param_name, spec, param_name in required, defs))
            lines.append("")

    lines.append("## Resources")
    lines.append("")
    for resource in registry.resources.values():
        lines.append(f"- `{resource.uri}` ({resource.mime_type}): {resource.title}")
    lines.append("")

    if registry.prompts:
        lines.append("## Prompts")
        lines.append("")
        for prompt in registry.prompts.values():
            args = ", ".join(
                a["name"] + ("" if a["required"] else "?") for a in prompt.arguments()
            )
            lines.append(f"- {prompt.name}({args}): {prompt.title}")
        lines.append("")

    return "\n".join(lines)
