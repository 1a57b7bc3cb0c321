"""Repository layout pattern substitution.

Patterns use Ivy's notation: ``[token]`` is replaced by the token value and a
parenthesised section such as ``(-[classifier])`` is only emitted when the
tokens inside it carry a value::

    [organisation]/[module]/[revision]/[artifact]-[revision](-[classifier]).[ext]

Tokens with no value outside an optional section are kept as literal
``[token]`` text; ``unresolved_tokens`` reports them so callers can reject
the path.
"""

from __future__ import annotations

import re
from typing import Dict, List, Mapping, Optional

from artifactdeploy.modules.deploydetails.domain import ArtifactDescriptor, TemplateSubstitutionError

_TOKEN_RE = re.compile(r"\[([^\[\]()]+)\]")


def build_tokens(
    artifact: ArtifactDescriptor,
    *,
    m2_compatible: bool,
    extra_tokens: Optional[Mapping[str, str]] = None,
) -> Dict[str, str]:
    """Token map for ``artifact``; ``classifier`` is only set when non-blank."""
    organisation = artifact.group.replace(".", "/") if m2_compatible else artifact.group
    tokens: Dict[str, str] = {
        "organisation": organisation,
        "organization": organisation,
        "module": artifact.module,
        "revision": artifact.version,
        "artifact": artifact.name,
        "type": artifact.type,
        "ext": artifact.extension,
        "conf": artifact.publication,
    }
    if artifact.has_classifier:
        tokens["classifier"] = artifact.classifier.strip()
    if extra_tokens:
        tokens.update(extra_tokens)
    return tokens


def substitute(pattern: str, tokens: Mapping[str, Optional[str]]) -> str:
    """Replace every ``[token]`` in ``pattern`` and resolve optional sections."""
    buffer: List[str] = []
    optional: Optional[List[str]] = None
    optional_has_token = False
    optional_complete = True
    token: Optional[List[str]] = None

    for pos, ch in enumerate(pattern):
        if token is not None:
            if ch == "]":
                name = "".join(token)
                token = None
                raw = tokens.get(name)
                value = None if raw is None else str(raw)
                if optional is not None:
                    optional_has_token = True
                    if value:
                        optional.append(value)
                    else:
                        optional_complete = False
                else:
                    buffer.append(value if value is not None else f"[{name}]")
            elif ch in "[()":
                raise TemplateSubstitutionError(
                    f"invalid character '{ch}' inside token at position {pos} in pattern '{pattern}'"
                )
            else:
                token.append(ch)
            continue

        if ch == "[":
            token = []
        elif ch == "]":
            raise TemplateSubstitutionError(f"unexpected token end at position {pos} in pattern '{pattern}'")
        elif ch == "(":
            if optional is not None:
                raise TemplateSubstitutionError(
                    f"nested optional part at position {pos} in pattern '{pattern}'"
                )
            optional = []
            optional_has_token = False
            optional_complete = True
        elif ch == ")":
            if optional is None:
                raise TemplateSubstitutionError(
                    f"optional part end ')' not expected at position {pos} in pattern '{pattern}'"
                )
            part = "".join(optional)
            if not optional_has_token:
                buffer.append(f"({part})")
            elif optional_complete:
                buffer.append(part)
            optional = None
        elif optional is not None:
            optional.append(ch)
        else:
            buffer.append(ch)

    if token is not None:
        raise TemplateSubstitutionError(f"missing token end ']' in pattern '{pattern}'")
    if optional is not None:
        raise TemplateSubstitutionError(f"missing optional part end ')' in pattern '{pattern}'")
    return "".join(buffer)


def unresolved_tokens(path: str) -> List[str]:
    return _TOKEN_RE.findall(path)


def resolve_artifact_path(
    pattern: str,
    artifact: ArtifactDescriptor,
    *,
    m2_compatible: bool,
    extra_tokens: Optional[Mapping[str, str]] = None,
) -> str:
    return substitute(pattern, build_tokens(artifact, m2_compatible=m2_compatible, extra_tokens=extra_tokens))
