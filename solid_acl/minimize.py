"""Rule minimization — collapse rules with identical applicability.

Two rules are merged when they target the same set of access_to resources
and carry the same default / default_for_new values. The merged rule grants
the union of both agent sets and both permission sets, and keeps every
unrecognized triple of every merged rule.

Formally, for a group G of rules with equal applicability:
  agents(G)      = ⋃ agents(r)         (public / authenticated OR-ed)
  permissions(G) = ⋃ permissions(r)
  other_quads(G) = other_quads(r1) ++ other_quads(r2) ++ ...
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Tuple

from rdflib.term import Node

from .types import AclRule


logger = logging.getLogger(__name__)

RuleEntry = Tuple[Optional[Node], AclRule]


def minimize(rules: Iterable[RuleEntry]) -> list[RuleEntry]:
    """Return a new list of (subject_id, rule) pairs with redundant rules merged.

    The input rules are not modified. The first rule of each group keeps
    its subject id and its position; later members are folded into it.
    """
    merged: dict[tuple, RuleEntry] = {}

    for subject_id, rule in rules:
        key = rule.applicability()
        if key not in merged:
            merged[key] = (subject_id, rule.copy())
            continue

        survivor_id, survivor = merged[key]
        logger.debug("Merging rule %s into %s", subject_id, survivor_id)
        survivor.agents.merge(rule.agents)
        survivor.permissions |= rule.permissions
        survivor.other_quads.extend(rule.other_quads)

    return list(merged.values())
