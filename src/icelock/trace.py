from __future__ import annotations

import logging
from typing import List

from .state import Icelock, Kind

logger = logging.getLogger("icelock")


def default_tracer(event: str, kind: Kind | None, detail: str) -> None:
    name = kind.name if kind is not None else "PRIMITIVE"
    print(f"[{name}] {event} {detail}")


def logging_tracer(event: str, kind: Kind | None, detail: str) -> None:
    name = kind.name if kind is not None else "PRIMITIVE"
    logger.debug("%s %s %s", name, event, detail)


def _state_str(handle: Icelock) -> str:
    return "frozen" if handle.frozen else "thawed"


def _walk(handle: Icelock, depth: int, out: List[tuple[int, Icelock]]) -> None:
    out.append((depth, handle))
    for child in handle.children:
        _walk(child, depth + 1, out)


def render(handle: Icelock) -> str:
    """One numbered line per handle, children indented under their parent."""
    nodes: List[tuple[int, Icelock]] = []
    _walk(handle, 0, nodes)
    lines = []
    for i, (depth, node) in enumerate(nodes):
        kind = node.kind.name if node.kind is not None else "PRIMITIVE"
        label = "  " * depth + node.label
        lines.append(f"{i:04d}: {label:<24} {kind:<9} {_state_str(node)}")
    return "\n".join(lines)


def print_tree(handle: Icelock) -> None:
    print(render(handle))
