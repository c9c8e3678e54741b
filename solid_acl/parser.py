"""ACL parser — decode triples into an AclDoc and encode it back.

  triples ──group_by_subject──▶ {subject: [triple]} ──decode──▶ AclDoc
  AclDoc ──minimize_rules──▶ AclDoc ──encode──▶ [triple] ──rdflib──▶ Turtle

Decoding and encoding are inverses up to triple order and the naming of
synthesized subject ids.
"""

from __future__ import annotations

import logging
from typing import Iterable, Mapping, Sequence

from rdflib import BNode, Graph, URIRef
from rdflib.term import Node

from .document import AclDoc
from .types import AclRule, Triple, UnsupportedAgentClassValue, as_term
from .vocabulary import (
    AUTHORIZATION,
    PREFIXES,
    AgentClass,
    Predicate,
    agent_class,
    is_authorization_marker,
    predicate_kind,
)


logger = logging.getLogger(__name__)


def group_by_subject(triples: Iterable[Triple]) -> dict[Node, list[Triple]]:
    """Group triples by subject, ordered by subject then predicate and object.

    Accepts an rdflib Graph or any iterable of triples.
    """
    groups: dict[Node, list[Triple]] = {}
    for triple in sorted(triples, key=lambda t: (str(t[0]), str(t[1]), str(t[2]))):
        groups.setdefault(triple[0], []).append(triple)
    return groups


def is_authorization(triples: Iterable[Triple]) -> bool:
    """True if any triple types its subject as acl:Authorization."""
    return any(
        predicate_kind(p) is Predicate.TYPE and is_authorization_marker(o)
        for _, p, o in triples
    )


class AclParser:
    """Maps between triples describing an ACL resource and an AclDoc.

    file_url is the resource the ACL controls and becomes AclDoc.access_to.
    acl_url is the location of the ACL itself; it is the base IRI for
    Turtle input and the namespace for synthesized subject ids.

    Each parser owns the counter used to name rules that have no subject
    id, so independent parsers never share naming state.
    """

    def __init__(
        self,
        file_url: str | None = None,
        acl_url: str | None = None,
        subject_prefix: str = "acl-parser-subject-",
    ) -> None:
        self.file_url = file_url
        self.acl_url = acl_url
        self.subject_prefix = subject_prefix
        self._subject_counter = 0

    # -----------------------------------------------------------------------
    # Decoding
    # -----------------------------------------------------------------------

    def triples_to_acl_doc(
        self,
        grouped: Mapping[Node, Sequence[Triple]],
        doc: AclDoc | None = None,
    ) -> AclDoc:
        """Decode subject-grouped triples into a document.

        Groups typed acl:Authorization become rules; all other groups go to
        the document's other_quads. If any group fails to decode, nothing is
        added to the document.

        Raises UnsupportedAgentClassValue for an unknown acl:agentClass value.
        """
        if doc is None:
            doc = AclDoc(access_to=self.file_url)

        rules: list[tuple[Node, AclRule]] = []
        others: list[Triple] = []
        for subject_id, triples in grouped.items():
            if is_authorization(triples):
                rules.append((subject_id, self._triples_to_rule(subject_id, triples)))
            else:
                others.extend(triples)

        for subject_id, rule in rules:
            doc.add_rule(rule, subject_id)
        doc.add_other(*others)
        logger.debug("Decoded %d rules and %d other triples", len(rules), len(others))
        return doc

    def _triples_to_rule(self, subject_id: Node, triples: Sequence[Triple]) -> AclRule:
        rule = AclRule()
        for triple in triples:
            self._add_triple_to_rule(rule, subject_id, triple)
        return rule

    def _add_triple_to_rule(self, rule: AclRule, subject_id: Node, triple: Triple) -> None:
        _, predicate, value = triple

        match predicate_kind(predicate):
            case Predicate.MODE:
                rule.add_permission(value)
            case Predicate.ACCESS_TO:
                rule.access_to.append(as_term(value))
            case Predicate.AGENT:
                rule.agents.add_web_id(value)
            case Predicate.AGENT_GROUP:
                rule.agents.add_group(value)
            case Predicate.AGENT_CLASS:
                match agent_class(value):
                    case AgentClass.PUBLIC:
                        rule.agents.add_public()
                    case AgentClass.AUTHENTICATED:
                        rule.agents.add_authenticated()
                    case _:
                        raise UnsupportedAgentClassValue(subject_id, value)
            case Predicate.DEFAULT:
                rule.default = value
            case Predicate.DEFAULT_FOR_NEW:
                # Legacy spelling of acl:default
                rule.default_for_new = value
                rule.default = value
            case Predicate.TYPE:
                pass
            case _:
                rule.other_quads.append(triple)

    # -----------------------------------------------------------------------
    # Encoding
    # -----------------------------------------------------------------------

    def acl_doc_to_triples(self, doc: AclDoc) -> list[Triple]:
        """Encode a document into an ordered list of triples.

        The document is read, never modified; call doc.minimize_rules()
        first to get the minimal triple set.
        """
        used = doc.subject_ids()
        triples: list[Triple] = []
        for subject_id, rule in doc.items():
            if subject_id is None:
                subject_id = self._new_subject_id(used)
                used.add(subject_id)
            triples.extend(self._rule_to_triples(subject_id, rule))
        triples.extend(doc.other_quads)
        return triples

    def _new_subject_id(self, used: set[Node]) -> Node:
        while True:
            name = f"{self.subject_prefix}{self._subject_counter}"
            self._subject_counter += 1
            subject = URIRef(f"{self.acl_url}#{name}") if self.acl_url else BNode(name)
            if subject not in used:
                logger.debug("Synthesized subject id %s", subject)
                return subject

    def _rule_to_triples(self, subject_id: Node, rule: AclRule) -> list[Triple]:
        s = subject_id
        triples: list[Triple] = [(s, Predicate.TYPE.value, AUTHORIZATION)]

        # Agents
        for web_id in rule.agents.web_ids:
            triples.append((s, Predicate.AGENT.value, web_id))
        for group in rule.agents.groups:
            triples.append((s, Predicate.AGENT_GROUP.value, group))
        if rule.agents.public:
            triples.append((s, Predicate.AGENT_CLASS.value, AgentClass.PUBLIC.value))
        if rule.agents.authenticated:
            triples.append((s, Predicate.AGENT_CLASS.value, AgentClass.AUTHENTICATED.value))

        for target in rule.access_to:
            triples.append((s, Predicate.ACCESS_TO.value, target))
        if rule.default is not None:
            triples.append((s, Predicate.DEFAULT.value, rule.default))
        if rule.default_for_new is not None:
            triples.append((s, Predicate.DEFAULT_FOR_NEW.value, rule.default_for_new))

        # Sorted so output is stable across runs
        for permission in sorted(rule.permissions, key=str):
            triples.append((s, Predicate.MODE.value, permission))

        # Merged rules may carry triples from a former subject
        for _, predicate, value in rule.other_quads:
            triples.append((s, predicate, value))
        return triples

    # -----------------------------------------------------------------------
    # Turtle
    # -----------------------------------------------------------------------

    def turtle_to_acl_doc(self, turtle: str) -> AclDoc:
        """Parse Turtle with the ACL url as base IRI and decode it."""
        graph = Graph()
        graph.parse(data=turtle, format="turtle", publicID=self.acl_url)
        return self.triples_to_acl_doc(group_by_subject(graph))

    def acl_doc_to_turtle(self, doc: AclDoc) -> str:
        """Minimize the document's rules, encode and serialize as Turtle."""
        doc.minimize_rules()
        graph = Graph()
        for prefix, namespace in PREFIXES.items():
            graph.bind(prefix, namespace)
        for triple in self.acl_doc_to_triples(doc):
            graph.add(triple)
        return graph.serialize(format="turtle")
