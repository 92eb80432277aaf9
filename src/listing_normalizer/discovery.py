"""Bounded discovery of listing-shaped objects inside an unknown JSON tree."""

import logging
from dataclasses import dataclass, field
from typing import Optional

from listing_normalizer.models.hints import FieldHintSchema
from listing_normalizer.values import Value

logger = logging.getLogger(__name__)

# An array whose first element is not listing-like is still taken as a list of
# listings when at least this share of its elements are listing-like.
LISTING_RATIO_THRESHOLD = 0.35
DEFAULT_MAX_DEPTH = 12
DEFAULT_MAX_NODES = 12000

Candidate = dict[str, Value]


@dataclass
class NodeBudget:
    """Node-visit budget shared by every traversal that receives it."""

    limit: int
    used: int = 0

    def take(self) -> bool:
        if self.used >= self.limit:
            return False
        self.used += 1
        return True

    @property
    def exhausted(self) -> bool:
        return self.used >= self.limit


@dataclass
class DiscoveryResult:
    candidates: list[Candidate] = field(default_factory=list)
    nodes_visited: int = 0
    truncated: bool = False


def is_listing_like(value: Value, listing_keys: frozenset[str]) -> bool:
    """An object owning at least one listing alias key."""
    if not isinstance(value, dict):
        return False
    return any(key in listing_keys for key in value)


def discover_candidates(
    payload: Value,
    hints: FieldHintSchema,
    *,
    max_depth: int = DEFAULT_MAX_DEPTH,
    max_nodes: int = DEFAULT_MAX_NODES,
    ratio_threshold: float = LISTING_RATIO_THRESHOLD,
    budget: Optional[NodeBudget] = None,
) -> DiscoveryResult:
    """
    Find every sub-object of `payload` that looks like one listing.

    Objects: a listing-like object is emitted and only its container keys
    (`hints.list_hint_paths`) are searched further; other objects are searched
    fully, container keys first. Arrays: returned whole when the first element
    is listing-like, filtered when enough elements are, otherwise searched
    element by element. Objects and arrays count against the node budget and are
    never visited twice; exceeding depth or budget truncates silently.
    Candidates are returned in document order and may contain duplicates.
    """
    budget = budget or NodeBudget(max_nodes)
    listing_keys = hints.listing_keys()
    container_keys = list(hints.list_hint_paths)
    container_set = set(container_keys)

    result = DiscoveryResult()
    visited: set[int] = set()
    stack: list[tuple[Value, int]] = [(payload, 0)]
    start_used = budget.used

    while stack:
        node, depth = stack.pop()
        if not isinstance(node, (dict, list)) or id(node) in visited:
            continue
        if depth > max_depth:
            result.truncated = True
            continue
        if not budget.take():
            result.truncated = True
            break
        visited.add(id(node))

        children: list[Value]
        if isinstance(node, list):
            if not node:
                continue
            if is_listing_like(node[0], listing_keys):
                result.candidates.extend(item for item in node if isinstance(item, dict))
                continue
            matches = [item for item in node if is_listing_like(item, listing_keys)]
            if matches and len(matches) >= len(node) * ratio_threshold:
                result.candidates.extend(matches)
                continue
            children = list(node)
        elif is_listing_like(node, listing_keys):
            result.candidates.append(node)
            children = [node[k] for k in container_keys if k in node]
        else:
            children = [node[k] for k in container_keys if k in node]
            children.extend(v for k, v in node.items() if k not in container_set)

        for child in reversed(children):
            stack.append((child, depth + 1))

    result.nodes_visited = budget.used - start_used
    if result.truncated:
        logger.debug(
            "Discovery truncated after %d nodes (depth limit %d, node limit %d); %d candidates kept",
            result.nodes_visited,
            max_depth,
            budget.limit,
            len(result.candidates),
        )
    return result
