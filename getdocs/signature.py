"""Type signature analysis for nested record discovery.

Signatures are matched textually, one hop deep: a signature either names a
known record outright (``Simple``) or is a parameterized type whose direct
arguments may name known records (``HashMap<String, Simple>``). Arguments that
are themselves parameterized (``Vec<Simple>``) are plain tokens and never match.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Container, List, Optional, Tuple


@dataclass(frozen=True)
class ParsedSignature:
    """The ``Outer<arg, ...>`` shape of a parameterized signature."""

    outer: str
    arguments: Tuple[str, ...]


def parse_signature(signature: str) -> Optional[ParsedSignature]:
    """Split ``Outer<A, B>`` into its outer name and top-level arguments.

    Returns None for anything that is not a single, balanced, bracketed
    parameter list closing at the end of the signature.
    """
    text = signature.strip()
    open_index = text.find("<")
    if open_index <= 0 or not text.endswith(">"):
        return None
    outer = text[:open_index].strip()
    if not outer or ">" in outer:
        return None

    arguments: List[str] = []
    current: List[str] = []
    depth = 0
    last = len(text) - 1
    for index in range(open_index + 1, len(text)):
        char = text[index]
        if char == "<":
            depth += 1
        elif char == ">":
            if depth == 0:
                # the outer list may only close on the final character
                if index != last:
                    return None
                break
            depth -= 1
        elif char == "," and depth == 0:
            arguments.append("".join(current).strip())
            current = []
            continue
        current.append(char)
    else:
        return None

    arguments.append("".join(current).strip())
    return ParsedSignature(outer=outer, arguments=tuple(arguments))


def resolve_nested_record(signature: str, registry: Container[str]) -> Tuple[str, ...]:
    """Return the known record names referenced by ``signature``, in argument order.

    A direct reference yields exactly one name. A parameterized signature yields
    each distinct argument that names a registered record. Everything else,
    malformed brackets included, yields nothing.
    """
    if not isinstance(signature, str):
        return ()
    text = signature.strip()
    if not text:
        return ()
    if text in registry:
        return (text,)

    parsed = parse_signature(text)
    if parsed is None:
        return ()

    resolved: List[str] = []
    for argument in parsed.arguments:
        if argument and argument in registry and argument not in resolved:
            resolved.append(argument)
    return tuple(resolved)


def is_record_reference(signature: str, registry: Container[str]) -> bool:
    return bool(resolve_nested_record(signature, registry))


__all__ = [
    "ParsedSignature",
    "is_record_reference",
    "parse_signature",
    "resolve_nested_record",
]
