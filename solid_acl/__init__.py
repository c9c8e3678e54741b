"""solid_acl — WebID access control lists as triples and as rules.

Maps the triples of a Web Access Control (.acl) document to a structured
rule model and back:

- Vocabulary: the acl: predicates, agent classes and permission modes
- Types: AclRule and Agents, one authorization statement each
- Document: AclDoc, rules keyed by subject plus passthrough triples
- Parser: AclParser, decoding grouped triples and encoding rules
- Minimize: merging rules that apply to the same resources

Turtle input and output go through rdflib. The shape lint
(solid_acl.shapes) checks for degenerate authorizations with pySHACL and
requires the optional dependency pyshacl.
"""

import logging

from .document import AclDoc
from .minimize import minimize
from .parser import AclParser, group_by_subject, is_authorization
from .types import AclError, AclRule, Agents, UnsupportedAgentClassValue
from .vocabulary import ACL, AUTHORIZATION, PREFIXES, AgentClass, Permission, Predicate

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "ACL",
    "AUTHORIZATION",
    "PREFIXES",
    "AclDoc",
    "AclError",
    "AclParser",
    "AclRule",
    "AgentClass",
    "Agents",
    "Permission",
    "Predicate",
    "UnsupportedAgentClassValue",
    "group_by_subject",
    "is_authorization",
    "minimize",
]
