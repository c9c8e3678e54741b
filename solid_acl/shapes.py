"""Shape lint — SHACL checks for degenerate authorizations.

A decoded or hand-built AclDoc may contain rules that grant nothing:
no acl:mode, no agent, or nothing to apply to. The parser encodes those
as-is. This module lets callers catch them before writing:

  1. acl_shapes() builds a SHACL shapes graph for acl:Authorization:
       acl:mode                          → sh:minCount 1
       accessTo | default | defaultForNew → sh:or, at least one present
       agent | agentGroup | agentClass    → sh:or, at least one present
       acl:agentClass                    → sh:in (foaf:Agent acl:AuthenticatedAgent)
  2. lint_graph() / lint_acl_doc() validate data against it with pySHACL.

Requires the optional dependency pyshacl.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from rdflib import BNode, Graph, Literal, Namespace, RDF, RDFS
from rdflib.collection import Collection
from rdflib.namespace import SH

from .document import AclDoc
from .parser import AclParser
from .vocabulary import ACL, AUTHORIZATION, AgentClass, Predicate


SHAPES = Namespace("urn:solid-acl:shapes#")


# ---------------------------------------------------------------------------
# Shapes graph
# ---------------------------------------------------------------------------

def _min_one(sg: Graph, path) -> BNode:
    prop = BNode()
    sg.add((prop, SH.path, path))
    sg.add((prop, SH.minCount, Literal(1)))
    return prop


def _one_of(sg: Graph, shape, paths, message: str) -> None:
    alternatives = []
    for path in paths:
        alt = BNode()
        sg.add((alt, SH.property, _min_one(sg, path)))
        alternatives.append(alt)
    head = BNode()
    Collection(sg, head, alternatives)
    sg.add((shape, SH["or"], head))
    sg.add((shape, RDFS.comment, Literal(message)))


def acl_shapes() -> Graph:
    """Build the SHACL shapes graph for acl:Authorization nodes."""
    sg = Graph()
    sg.bind("sh", SH)
    sg.bind("acl", ACL)

    shape = SHAPES.AuthorizationShape
    sg.add((shape, RDF.type, SH.NodeShape))
    sg.add((shape, SH.targetClass, AUTHORIZATION))

    modes = _min_one(sg, Predicate.MODE.value)
    sg.add((modes, SH.name, Literal("mode")))
    sg.add((shape, SH.property, modes))

    classes = BNode()
    sg.add((shape, SH.property, classes))
    sg.add((classes, SH.path, Predicate.AGENT_CLASS.value))
    values = BNode()
    Collection(sg, values, [c.value for c in AgentClass])
    sg.add((classes, SH["in"], values))

    _one_of(
        sg, shape,
        [Predicate.ACCESS_TO.value, Predicate.DEFAULT.value, Predicate.DEFAULT_FOR_NEW.value],
        "Authorization must apply to a resource (accessTo or default)",
    )
    _one_of(
        sg, shape,
        [Predicate.AGENT.value, Predicate.AGENT_GROUP.value, Predicate.AGENT_CLASS.value],
        "Authorization must name an agent (agent, agentGroup or agentClass)",
    )
    return sg


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------

def lint_graph(data: Graph) -> LintResult:
    """Validate an RDF graph of ACL triples against acl_shapes()."""
    from pyshacl import validate as pyshacl_validate

    shapes_graph = acl_shapes()
    conforms, results_graph, results_text = pyshacl_validate(
        data,
        shacl_graph=shapes_graph,
        inference="none",
        abort_on_first=False,
    )

    violations = []
    for result in results_graph.subjects(RDF.type, SH.ValidationResult):
        focus = results_graph.value(result, SH.focusNode)
        path = results_graph.value(result, SH.resultPath)
        message = results_graph.value(result, SH.resultMessage)

        violations.append(LintViolation(
            focus_node=str(focus) if focus else "",
            path=str(path) if path else "",
            message=str(message) if message else "",
        ))

    return LintResult(conforms=conforms, violations=violations, results_text=results_text)


def lint_acl_doc(doc: AclDoc, parser: AclParser | None = None) -> LintResult:
    """Encode a document (without minimizing it) and lint the result."""
    parser = parser or AclParser(file_url=doc.access_to)
    data = Graph()
    for triple in parser.acl_doc_to_triples(doc):
        data.add(triple)
    return lint_graph(data)


# ---------------------------------------------------------------------------
# Result types
# ---------------------------------------------------------------------------

@dataclass
class LintViolation:
    """A single shape violation on one authorization."""
    focus_node: str
    path: str
    message: str

    def __repr__(self) -> str:
        path = self.path.rsplit("#", 1)[-1] if self.path else "-"
        return f"LintViolation({self.focus_node}.{path}: {self.message})"


@dataclass
class LintResult:
    conforms: bool
    violations: list[LintViolation] = field(default_factory=list)
    results_text: str = ""

    @property
    def focus_nodes(self) -> set[str]:
        return {v.focus_node for v in self.violations}

    def summary(self) -> str:
        lines = []
        status = "CONFORMS" if self.conforms else "DOES NOT CONFORM"
        lines.append(f"ACL lint: {status}")
        lines.append("-" * 50)
        if self.violations:
            lines.append(f"  Violations ({len(self.violations)}):")
            for v in self.violations:
                lines.append(f"    - {v!r}")
        else:
            lines.append("  No violations found.")
        return "\n".join(lines)
