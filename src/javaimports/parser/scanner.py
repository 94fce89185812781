"""Scope-aware walk over a Java syntax tree.

The scanner answers three questions about one compilation unit:

- which type names does it declare at top level (these are what other
  files can import from it),
- which identifiers does it use without declaring or importing them
  (these are what needs an import),
- what does each declared class extend.

Scoping is deliberately shallow. Members of a class body are visible
everywhere in that body, locals are visible from their declaration to the
end of the enclosing block, and every type declared anywhere in the file is
visible everywhere in it by simple name. Inherited members are unknown, so
a file extending an external class may report some inherited names as
unresolved.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from javaimports.parser.builtins import JAVA_LANG
from javaimports.parser.models import Import

TYPE_DECLARATIONS: frozenset[str] = frozenset(
    {
        "class_declaration",
        "interface_declaration",
        "enum_declaration",
        "record_declaration",
        "annotation_type_declaration",
    }
)

_CLASS_BODIES: frozenset[str] = frozenset(
    {"class_body", "interface_body", "enum_body", "annotation_type_body"}
)

_FIELD_DECLARATIONS: frozenset[str] = frozenset({"field_declaration", "constant_declaration"})

# Static methods every enum type declares implicitly.
_ENUM_IMPLICIT_METHODS: frozenset[str] = frozenset({"values", "valueOf"})

_CALLABLES: frozenset[str] = frozenset(
    {
        "method_declaration",
        "constructor_declaration",
        "compact_constructor_declaration",
        "annotation_type_element_declaration",
    }
)

_BLOCKS: frozenset[str] = frozenset(
    {
        "block",
        "constructor_body",
        "switch_block",
        "for_statement",
        "try_with_resources_statement",
    }
)


def node_text(node: Any) -> str:
    return node.text.decode("utf-8") if node.text else ""


def scoped_path(node: Any) -> list[str]:
    """Path parts of an ``identifier`` or (nested) ``scoped_identifier``."""
    if node.type == "identifier":
        return [node_text(node)]
    parts: list[str] = []
    for child in node.children:
        if child.type in ("scoped_identifier", "identifier"):
            parts.extend(scoped_path(child))
    return parts


def import_from_node(node: Any) -> Import | None:
    """Build an ``Import`` from an ``import_declaration`` node.

    Returns None for on-demand (``.*``) imports, which name no single symbol.
    """
    is_static = False
    path_parts: list[str] = []
    for child in node.children:
        if child.type == "static":
            is_static = True
        elif child.type in ("scoped_identifier", "identifier"):
            path_parts = scoped_path(child)
        elif child.type == "asterisk":
            return None

    if not path_parts:
        return None
    return Import(
        name=path_parts[-1],
        qualifier=".".join(path_parts[:-1]),
        is_static=is_static,
    )


def _simple_type_name(node: Any | None) -> str | None:
    """Simple name of a type node (``a.b.Foo<T>`` -> ``Foo``)."""
    if node is None:
        return None
    if node.type == "type_identifier":
        return node_text(node)
    if node.type == "generic_type":
        return _simple_type_name(node.named_children[0]) if node.named_children else None
    if node.type == "scoped_type_identifier":
        names = [c for c in node.named_children if c.type == "type_identifier"]
        return node_text(names[-1]) if names else None
    if node.type == "superclass":
        for child in node.named_children:
            name = _simple_type_name(child)
            if name:
                return name
    return None


class _Scope:
    __slots__ = ("names", "parent")

    def __init__(self, parent: _Scope | None = None) -> None:
        self.names: set[str] = set()
        self.parent = parent

    def declare(self, name: str) -> None:
        self.names.add(name)

    def is_bound(self, name: str) -> bool:
        scope: _Scope | None = self
        while scope is not None:
            if name in scope.names:
                return True
            scope = scope.parent
        return False


@dataclass
class ScanResult:
    """Everything the scanner learned about one compilation unit."""

    package_name: str = ""
    top_level_declarations: list[str] = field(default_factory=list)
    unresolved_identifiers: set[str] = field(default_factory=set)
    class_hierarchy: dict[str, tuple[str, ...]] = field(default_factory=dict)
    imports: list[Import] = field(default_factory=list)

    @property
    def superclass_chain(self) -> tuple[str, ...]:
        if not self.top_level_declarations:
            return ()
        return self.class_hierarchy.get(self.top_level_declarations[0], ())


class UnresolvedIdentifierScanner:
    """Finds the identifiers a compilation unit uses but does not bind.

    Usage::

        scanner = UnresolvedIdentifierScanner()
        result = scanner.scan(tree.root_node)
        result.unresolved_identifiers  # {"List", "Foo"}
    """

    def __init__(self) -> None:
        self._file_scope = _Scope()
        self._scope = self._file_scope
        self._unresolved: set[str] = set()
        self._handlers: dict[str, Callable[[Any], None]] = {
            "package_declaration": self._skip,
            "import_declaration": self._skip,
            "module_declaration": self._skip,
            "break_statement": self._skip,
            "continue_statement": self._skip,
            "identifier": self._visit_reference,
            "type_identifier": self._visit_reference,
            "type_parameters": self._visit_type_parameters,
            "formal_parameters": self._visit_formal_parameters,
            "variable_declarator": self._visit_variable_declarator,
            "formal_parameter": self._visit_declaring,
            "spread_parameter": self._visit_declaring,
            "catch_formal_parameter": self._visit_declaring,
            "type_pattern": self._visit_declaring,
            "record_pattern_component": self._visit_declaring,
            "receiver_parameter": self._visit_skipping_identifiers,
            "labeled_statement": self._visit_skipping_identifiers,
            "switch_label": self._visit_skipping_identifiers,
            "enum_constant": self._visit_skipping_identifiers,
            "enhanced_for_statement": self._visit_enhanced_for,
            "instanceof_expression": self._visit_binding,
            "resource": self._visit_binding,
            "catch_clause": self._visit_in_new_scope,
            "lambda_expression": self._visit_lambda,
            "field_access": self._visit_field_access,
            "method_invocation": self._visit_method_invocation,
            "method_reference": self._visit_method_reference,
            "scoped_identifier": self._visit_scoped_identifier,
            "scoped_type_identifier": self._visit_scoped_type_identifier,
            "element_value_pair": self._visit_element_value_pair,
        }
        for kind in TYPE_DECLARATIONS:
            self._handlers[kind] = self._visit_type_declaration
        for kind in _CALLABLES:
            self._handlers[kind] = self._visit_callable
        for kind in _CLASS_BODIES:
            self._handlers[kind] = self._visit_class_body
        for kind in _BLOCKS:
            self._handlers[kind] = self._visit_in_new_scope

    def scan(self, root: Any) -> ScanResult:
        result = ScanResult()

        for child in root.named_children:
            if child.type == "package_declaration":
                parts = [
                    p
                    for c in child.named_children
                    if c.type in ("scoped_identifier", "identifier")
                    for p in scoped_path(c)
                ]
                result.package_name = ".".join(parts)
            elif child.type == "import_declaration":
                imported = import_from_node(child)
                if imported is not None:
                    result.imports.append(imported)
                    self._file_scope.declare(imported.name)
            elif child.type in TYPE_DECLARATIONS:
                name = child.child_by_field_name("name")
                if name is not None:
                    result.top_level_declarations.append(node_text(name))

        superclasses = self._collect_type_declarations(root)
        result.class_hierarchy = {
            name: _chain(name, superclasses) for name in superclasses
        }

        self._visit(root)
        result.unresolved_identifiers = set(self._unresolved)
        return result

    def _collect_type_declarations(self, root: Any) -> dict[str, str | None]:
        """Declare every type of the file by simple name and record superclasses."""
        superclasses: dict[str, str | None] = {}
        stack = [root]
        while stack:
            node = stack.pop()
            if node.type in TYPE_DECLARATIONS:
                name_node = node.child_by_field_name("name")
                if name_node is not None:
                    name = node_text(name_node)
                    self._file_scope.declare(name)
                    superclass = None
                    if node.type == "class_declaration":
                        superclass = _simple_type_name(node.child_by_field_name("superclass"))
                    superclasses.setdefault(name, superclass)
            stack.extend(reversed(node.named_children))
        return superclasses

    # ---- Scope management ----

    def _push(self) -> None:
        self._scope = _Scope(self._scope)

    def _pop(self) -> None:
        assert self._scope.parent is not None
        self._scope = self._scope.parent

    def _declare(self, node: Any | None) -> None:
        if node is not None and node.type == "identifier":
            self._scope.declare(node_text(node))

    def _reference(self, name: str) -> None:
        if not name or name in JAVA_LANG:
            return
        if not self._scope.is_bound(name):
            self._unresolved.add(name)

    # ---- Visitors ----

    def _visit(self, node: Any) -> None:
        handler = self._handlers.get(node.type)
        if handler is not None:
            handler(node)
            return
        for child in node.named_children:
            self._visit(child)

    def _visit_children(self, node: Any) -> None:
        for child in node.named_children:
            self._visit(child)

    def _skip(self, node: Any) -> None:
        pass

    def _visit_reference(self, node: Any) -> None:
        self._reference(node_text(node))

    def _visit_skipping_identifiers(self, node: Any) -> None:
        for child in node.named_children:
            if child.type != "identifier":
                self._visit(child)

    def _visit_declaring(self, node: Any) -> None:
        """Visit a declaration whose direct identifier children are bound names."""
        for child in node.named_children:
            if child.type == "identifier":
                self._declare(child)
            else:
                self._visit(child)

    def _visit_binding(self, node: Any) -> None:
        """Visit a node whose ``name`` field, if any, binds a local."""
        name = node.child_by_field_name("name")
        self._declare(name)
        for child in node.named_children:
            if name is not None and child == name:
                continue
            self._visit(child)

    def _visit_in_new_scope(self, node: Any) -> None:
        self._push()
        try:
            self._visit_children(node)
        finally:
            self._pop()

    def _visit_enhanced_for(self, node: Any) -> None:
        self._push()
        try:
            self._visit_binding(node)
        finally:
            self._pop()

    def _visit_type_declaration(self, node: Any) -> None:
        # The type's own scope holds its type parameters and record components;
        # the body opens a nested scope for members.
        self._push()
        try:
            self._visit_skipping_identifiers(node)
        finally:
            self._pop()

    def _visit_callable(self, node: Any) -> None:
        self._push()
        try:
            self._visit_skipping_identifiers(node)
        finally:
            self._pop()

    def _visit_class_body(self, node: Any) -> None:
        self._push()
        try:
            self._declare_members(node)
            for child in node.named_children:
                if child.type == "enum_body_declarations":
                    self._visit_children(child)
                else:
                    self._visit(child)
        finally:
            self._pop()

    def _declare_members(self, body: Any) -> None:
        if body.type == "enum_body":
            for name in _ENUM_IMPLICIT_METHODS:
                self._scope.declare(name)
        for member in body.named_children:
            if member.type in _FIELD_DECLARATIONS:
                for declarator in member.children_by_field_name("declarator"):
                    self._declare(declarator.child_by_field_name("name"))
            elif member.type in _CALLABLES or member.type == "enum_constant":
                self._declare(member.child_by_field_name("name"))
            elif member.type == "enum_body_declarations":
                self._declare_members(member)

    def _visit_type_parameters(self, node: Any) -> None:
        parameters = [p for p in node.named_children if p.type == "type_parameter"]
        for parameter in parameters:
            for child in parameter.named_children:
                if child.type == "type_identifier":
                    self._scope.declare(node_text(child))
                    break
        for parameter in parameters:
            for child in parameter.named_children:
                if child.type != "type_identifier":
                    self._visit(child)

    def _visit_formal_parameters(self, node: Any) -> None:
        for parameter in node.named_children:
            self._visit(parameter)

    def _visit_variable_declarator(self, node: Any) -> None:
        value = node.child_by_field_name("value")
        if value is not None:
            self._visit(value)
        self._declare(node.child_by_field_name("name"))

    def _visit_lambda(self, node: Any) -> None:
        self._push()
        try:
            parameters = node.child_by_field_name("parameters")
            if parameters is not None:
                if parameters.type == "identifier":
                    self._declare(parameters)
                elif parameters.type == "inferred_parameters":
                    for child in parameters.named_children:
                        self._declare(child)
                else:
                    self._visit(parameters)
            body = node.child_by_field_name("body")
            if body is not None:
                self._visit(body)
        finally:
            self._pop()

    def _visit_field_access(self, node: Any) -> None:
        receiver = node.child_by_field_name("object")
        if receiver is not None:
            self._visit(receiver)

    def _visit_method_invocation(self, node: Any) -> None:
        receiver = node.child_by_field_name("object")
        if receiver is not None:
            self._visit(receiver)
        else:
            name = node.child_by_field_name("name")
            if name is not None:
                self._reference(node_text(name))
        for field_name in ("type_arguments", "arguments"):
            child = node.child_by_field_name(field_name)
            if child is not None:
                self._visit(child)

    def _visit_method_reference(self, node: Any) -> None:
        # Only the receiver (before ``::``) is a reference.
        for child in node.children:
            if child.type == "::":
                break
            if child.is_named:
                self._visit(child)
        for child in node.named_children:
            if child.type == "type_arguments":
                self._visit(child)

    def _visit_scoped_identifier(self, node: Any) -> None:
        scope = node.child_by_field_name("scope")
        if scope is not None:
            self._visit(scope)

    def _visit_scoped_type_identifier(self, node: Any) -> None:
        children = node.named_children
        for child in children[:-1]:
            self._visit(child)

    def _visit_element_value_pair(self, node: Any) -> None:
        value = node.child_by_field_name("value")
        if value is not None:
            self._visit(value)


def _chain(name: str, superclasses: dict[str, str | None]) -> tuple[str, ...]:
    """Follow ``extends`` through types declared in the same file."""
    chain: list[str] = []
    seen = {name}
    current = superclasses.get(name)
    while current is not None:
        chain.append(current)
        if current in seen or current not in superclasses:
            break
        seen.add(current)
        current = superclasses[current]
    return tuple(chain)
