"""ACL document — the aggregate the parser populates and reads.

An AclDoc holds the authorization rules of one .acl resource keyed by
subject id, plus every triple that does not belong to an authorization.
"""

from __future__ import annotations

import logging
from typing import Iterable, Iterator

from rdflib.term import Node

from .minimize import RuleEntry, minimize
from .types import AclRule, Agents, Triple, as_term


logger = logging.getLogger(__name__)


class AclDoc:
    """Rules and passthrough triples of one ACL resource.

    Rules added without a subject id are kept in insertion order and get an
    id only when encoded. Rules added with an id already present are merged
    into the existing rule.
    """

    def __init__(self, access_to=None) -> None:
        # The resource this ACL describes; context only, never serialized
        self.access_to = access_to
        self._rules: list[RuleEntry] = []
        self.other_quads: list[Triple] = []

    # -----------------------------------------------------------------------
    # Builder API
    # -----------------------------------------------------------------------

    def add_rule(self, rule: AclRule, subject_id: Node | None = None) -> AclRule:
        """Add a rule, merging it into an existing rule with the same id."""
        if subject_id is not None:
            subject_id = as_term(subject_id)
            existing = self.get_rule(subject_id)
            if existing is not None:
                logger.debug("Merging rule into existing subject %s", subject_id)
                existing.agents.merge(rule.agents)
                existing.permissions |= rule.permissions
                for target in rule.access_to:
                    if target not in existing.access_to:
                        existing.access_to.append(target)
                if rule.default is not None:
                    existing.default = rule.default
                if rule.default_for_new is not None:
                    existing.default_for_new = rule.default_for_new
                existing.other_quads.extend(rule.other_quads)
                return existing
        self._rules.append((subject_id, rule))
        return rule

    def add_other(self, *triples: Triple) -> None:
        self.other_quads.extend(triples)

    def grant(self, permissions: Iterable, agents: Agents, default=None) -> AclRule:
        """Add a rule granting permissions on this document's resource."""
        if self.access_to is None:
            raise ValueError("AclDoc has no access_to resource to grant on")
        rule = AclRule.of(permissions, agents, access_to=[self.access_to], default=default)
        return self.add_rule(rule)

    def get_rule(self, subject_id: Node) -> AclRule | None:
        subject_id = as_term(subject_id)
        for sid, rule in self._rules:
            if sid is not None and sid == subject_id:
                return rule
        return None

    def delete_rule(self, subject_id: Node) -> None:
        """Remove the rule stored under subject_id."""
        subject_id = as_term(subject_id)
        before = len(self._rules)
        self._rules = [
            (sid, rule) for sid, rule in self._rules
            if sid is None or sid != subject_id
        ]
        if len(self._rules) == before:
            raise KeyError(subject_id)

    # -----------------------------------------------------------------------
    # Minimization
    # -----------------------------------------------------------------------

    def minimize_rules(self) -> None:
        """Replace the rules with their minimized form."""
        before = len(self._rules)
        self._rules = minimize(self._rules)
        logger.debug("Minimized %d rules to %d", before, len(self._rules))

    # -----------------------------------------------------------------------
    # Read API
    # -----------------------------------------------------------------------

    def items(self) -> Iterator[RuleEntry]:
        """Iterate (subject_id, rule) pairs in insertion order."""
        return iter(list(self._rules))

    @property
    def rules(self) -> list[AclRule]:
        return [rule for _, rule in self._rules]

    def subject_ids(self) -> set[Node]:
        """Every subject id already used in the document."""
        ids = {sid for sid, _ in self._rules if sid is not None}
        for triples in (self.other_quads, *(r.other_quads for r in self.rules)):
            ids.update(s for s, _, _ in triples)
        return ids

    def __len__(self) -> int:
        return len(self._rules)

    def __repr__(self) -> str:
        return (
            f"AclDoc({self.access_to}, "
            f"{len(self._rules)} rules, "
            f"{len(self.other_quads)} other triples)"
        )
