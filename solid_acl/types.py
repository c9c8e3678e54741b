"""Core types — the structured model of one authorization statement.

An acl:Authorization subject decodes into an AclRule:

  AclRule = (permissions, agents, access_to, default, default_for_new, other_quads)

where agents is the additive union of explicit web ids, groups and the two
agent classes (public, authenticated).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Tuple

from rdflib import URIRef
from rdflib.term import Node


Triple = Tuple[Node, Node, Node]


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class AclError(Exception):
    """Base class for errors raised while mapping ACL documents."""


class UnsupportedAgentClassValue(AclError, ValueError):
    """An acl:agentClass object is neither foaf:Agent nor acl:AuthenticatedAgent."""

    def __init__(self, subject, value) -> None:
        self.subject = subject
        self.value = value
        super().__init__(f"Unexpected value for agentClass on {subject}: {value}")


def as_term(value) -> Node:
    """Return value as an rdflib term, wrapping plain strings as URIRefs."""
    if value is None or str(value) == "":
        raise ValueError("IRI must be a non-empty string")
    return value if isinstance(value, Node) else URIRef(str(value))


# ---------------------------------------------------------------------------
# Agents
# ---------------------------------------------------------------------------

@dataclass
class Agents:
    """Who a rule grants access to.

    The four forms are independent: a rule may name web ids, groups and
    both agent classes at the same time.
    """
    web_ids: list[URIRef] = field(default_factory=list)
    groups: list[URIRef] = field(default_factory=list)
    public: bool = False
    authenticated: bool = False

    def add_web_id(self, *web_ids) -> None:
        for web_id in web_ids:
            web_id = as_term(web_id)
            if web_id not in self.web_ids:
                self.web_ids.append(web_id)

    def add_group(self, *groups) -> None:
        for group in groups:
            group = as_term(group)
            if group not in self.groups:
                self.groups.append(group)

    def add_public(self) -> None:
        self.public = True

    def add_authenticated(self) -> None:
        self.authenticated = True

    def remove_web_id(self, *web_ids) -> None:
        drop = {as_term(w) for w in web_ids}
        self.web_ids = [w for w in self.web_ids if w not in drop]

    def remove_group(self, *groups) -> None:
        drop = {as_term(g) for g in groups}
        self.groups = [g for g in self.groups if g not in drop]

    def remove_public(self) -> None:
        self.public = False

    def remove_authenticated(self) -> None:
        self.authenticated = False

    def is_empty(self) -> bool:
        return not (self.web_ids or self.groups or self.public or self.authenticated)

    def merge(self, other: Agents) -> None:
        """Union another Agents into this one."""
        self.add_web_id(*other.web_ids)
        self.add_group(*other.groups)
        self.public = self.public or other.public
        self.authenticated = self.authenticated or other.authenticated

    def copy(self) -> Agents:
        return Agents(
            web_ids=list(self.web_ids),
            groups=list(self.groups),
            public=self.public,
            authenticated=self.authenticated,
        )

    @classmethod
    def of(
        cls,
        web_ids: Iterable = (),
        groups: Iterable = (),
        public: bool = False,
        authenticated: bool = False,
    ) -> Agents:
        agents = cls(public=public, authenticated=authenticated)
        agents.add_web_id(*web_ids)
        agents.add_group(*groups)
        return agents

    def __repr__(self) -> str:
        parts = [str(w) for w in self.web_ids]
        parts += [f"group:{g}" for g in self.groups]
        if self.public:
            parts.append("PUBLIC")
        if self.authenticated:
            parts.append("AUTHENTICATED")
        return f"Agents({', '.join(parts)})"


# ---------------------------------------------------------------------------
# AclRule
# ---------------------------------------------------------------------------

@dataclass
class AclRule:
    """One acl:Authorization.

    default_for_new is the deprecated spelling of default. Decoding the
    legacy predicate sets both fields; setting default alone never
    produces the legacy predicate on encode.
    """
    permissions: set[URIRef] = field(default_factory=set)
    agents: Agents = field(default_factory=Agents)
    access_to: list[URIRef] = field(default_factory=list)
    default: URIRef | None = None
    default_for_new: URIRef | None = None

    # Triples on this rule's subject with unrecognized predicates
    other_quads: list[Triple] = field(default_factory=list)

    def add_permission(self, *permissions) -> None:
        for permission in permissions:
            self.permissions.add(as_term(permission))

    def add_access_to(self, *targets) -> None:
        for target in targets:
            target = as_term(target)
            if target not in self.access_to:
                self.access_to.append(target)

    def is_degenerate(self) -> bool:
        """True if the rule grants nothing to no one.

        Degenerate rules still encode; callers decide whether to keep them.
        """
        return not self.permissions or self.agents.is_empty()

    def applicability(self) -> tuple:
        """Key identifying which resources this rule applies to."""
        return (
            frozenset(self.access_to),
            self.default,
            self.default_for_new,
        )

    def copy(self) -> AclRule:
        return AclRule(
            permissions=set(self.permissions),
            agents=self.agents.copy(),
            access_to=list(self.access_to),
            default=self.default,
            default_for_new=self.default_for_new,
            other_quads=list(self.other_quads),
        )

    @classmethod
    def of(
        cls,
        permissions: Iterable = (),
        agents: Agents | None = None,
        access_to: Iterable = (),
        default=None,
    ) -> AclRule:
        """Build a rule from plain values, validating every IRI."""
        rule = cls(agents=agents.copy() if agents is not None else Agents())
        rule.add_permission(*permissions)
        rule.add_access_to(*access_to)
        if default is not None:
            rule.default = as_term(default)
        return rule

    def __repr__(self) -> str:
        modes = ", ".join(sorted(str(p).rsplit("#", 1)[-1] for p in self.permissions))
        return f"AclRule([{modes}] for {self.agents!r} on {[str(t) for t in self.access_to]})"
