"""Vocabulary — predicate and value IRIs of the Web Access Control ontology.

Single source of truth for every IRI the parser recognizes. Decoding looks
predicates up with predicate_kind(); encoding reads Predicate.<KIND>.value.
"""

from __future__ import annotations

from enum import Enum

from rdflib import Namespace, URIRef
from rdflib.namespace import FOAF, RDF, RDFS


ACL = Namespace("http://www.w3.org/ns/auth/acl#")
VCARD = Namespace("http://www.w3.org/2006/vcard/ns#")
LDP = Namespace("http://www.w3.org/ns/ldp#")
SOLID = Namespace("http://www.w3.org/ns/solid/terms#")

# Prefix table handed to the writer
PREFIXES: dict[str, Namespace] = {
    "acl": ACL,
    "foaf": Namespace(str(FOAF)),
    "rdf": Namespace(str(RDF)),
    "rdfs": Namespace(str(RDFS)),
    "vcard": VCARD,
    "ldp": LDP,
    "solid": SOLID,
}


# ---------------------------------------------------------------------------
# Predicates
# ---------------------------------------------------------------------------

class Predicate(Enum):
    """The recognized predicate kinds of an acl:Authorization subject."""
    MODE = ACL.mode
    AGENT = ACL.agent
    AGENT_GROUP = ACL.agentGroup
    AGENT_CLASS = ACL.agentClass
    ACCESS_TO = ACL.accessTo
    DEFAULT = ACL.default
    DEFAULT_FOR_NEW = ACL.defaultForNew  # deprecated alias of DEFAULT
    TYPE = RDF.type


_BY_IRI: dict[URIRef, Predicate] = {kind.value: kind for kind in Predicate}


def predicate_kind(iri) -> Predicate | None:
    """Return the Predicate for an IRI, or None if it is not recognized."""
    return _BY_IRI.get(URIRef(str(iri)))


# ---------------------------------------------------------------------------
# Object values
# ---------------------------------------------------------------------------

AUTHORIZATION = ACL.Authorization


def is_authorization_marker(value) -> bool:
    """True if value is acl:Authorization, whatever term type carries it."""
    return URIRef(str(value)) == AUTHORIZATION


class AgentClass(Enum):
    """Recognized objects of acl:agentClass."""
    PUBLIC = FOAF.Agent
    AUTHENTICATED = ACL.AuthenticatedAgent


_AGENT_CLASS_BY_IRI: dict[URIRef, AgentClass] = {cls.value: cls for cls in AgentClass}


def agent_class(iri) -> AgentClass | None:
    return _AGENT_CLASS_BY_IRI.get(URIRef(str(iri)))


class Permission:
    """Access modes usable as acl:mode objects."""
    READ = ACL.Read
    WRITE = ACL.Write
    APPEND = ACL.Append
    CONTROL = ACL.Control

    ALL = frozenset({READ, WRITE, APPEND, CONTROL})
