"""Serialise a DocBlock back to doc-comment text."""

from __future__ import annotations

from pcoslint.model.declaration import DocBlock, DocParam, DocProp


def _member(member: DocParam | DocProp) -> str:
    parts: list[str] = []
    if member.type:
        parts.append("{" + member.type + "}")
    suffix = f"={member.default}" if member.default is not None else ""
    name = f"{member.name}{suffix}"
    parts.append(f"[{name}]" if member.optional else name)
    if member.description:
        parts.append(f"- {member.description}")
    return " ".join(parts)


def render_docblock(block: DocBlock) -> str:
    """Render *block* as a ``/** ... */`` comment that extracts back to itself."""
    body: list[str] = []
    if block.description:
        body.extend(block.description.split("\n"))
        body.append("")
    if block.type is not None:
        body.append(f"@type {block.type.value}")
    if block.name:
        body.append(f"@name {block.name}")
    if block.implements:
        body.append(f"@implements {block.implements}")
    if block.returns:
        body.append(f"@returns {{{block.returns}}}")
    body.extend(f"@param {_member(p)}" for p in block.params)
    body.extend(f"@prop {_member(p)}" for p in block.props)
    for modifier in block.modifiers:
        text = f"@modifier {modifier.name}"
        if modifier.description:
            text += f" - {modifier.description}"
        body.append(text)
    for tag, values in block.extensions.items():
        body.extend(f"@{tag} {value}".rstrip() for value in values)
    lines = ["/**"] + [f" * {line}".rstrip() for line in body] + [" */"]
    return "\n".join(lines)
