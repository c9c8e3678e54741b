"""Tests for the predicate/value vocabulary table."""

import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from rdflib import Literal, URIRef
from rdflib.namespace import FOAF, RDF

from solid_acl.vocabulary import (
    ACL,
    AUTHORIZATION,
    PREFIXES,
    AgentClass,
    Permission,
    Predicate,
    agent_class,
    is_authorization_marker,
    predicate_kind,
)


class TestPredicates:
    def test_acl_predicates_use_acl_namespace(self):
        assert Predicate.MODE.value == URIRef("http://www.w3.org/ns/auth/acl#mode")
        assert Predicate.AGENT_GROUP.value == URIRef("http://www.w3.org/ns/auth/acl#agentGroup")
        assert Predicate.DEFAULT_FOR_NEW.value == URIRef("http://www.w3.org/ns/auth/acl#defaultForNew")

    def test_type_is_rdf_type(self):
        assert Predicate.TYPE.value == RDF.type

    def test_lookup_by_iri(self):
        for kind in Predicate:
            assert predicate_kind(kind.value) is kind

    def test_lookup_accepts_plain_strings(self):
        assert predicate_kind("http://www.w3.org/ns/auth/acl#accessTo") is Predicate.ACCESS_TO

    def test_unknown_predicate(self):
        assert predicate_kind("http://example.org/custom") is None


class TestValues:
    def test_authorization_marker(self):
        assert AUTHORIZATION == ACL.Authorization

    def test_authorization_marker_any_term_type(self):
        assert is_authorization_marker(ACL.Authorization)
        assert is_authorization_marker(str(ACL.Authorization))
        assert is_authorization_marker(Literal(str(ACL.Authorization)))
        assert not is_authorization_marker(FOAF.Document)

    def test_agent_classes(self):
        assert agent_class(FOAF.Agent) is AgentClass.PUBLIC
        assert agent_class(ACL.AuthenticatedAgent) is AgentClass.AUTHENTICATED
        assert agent_class("http://example.org/Nonsense") is None

    def test_permissions(self):
        assert Permission.READ == ACL.Read
        assert Permission.ALL == {ACL.Read, ACL.Write, ACL.Append, ACL.Control}

    def test_prefix_table(self):
        assert str(PREFIXES["acl"]) == str(ACL)
        assert str(PREFIXES["foaf"]) == str(FOAF)
