"""Tree-sitter parsing of Java source files.

``JavaParser.parse`` turns source text into a ``ParsedFile``: it builds the
syntax tree with the tree-sitter Java grammar, rejects text that does not
parse cleanly, and runs an ``UnresolvedIdentifierScanner`` over the tree to
find declared names, unresolved identifiers and superclass chains.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import tree_sitter
import tree_sitter_java

from javaimports.config.options import Options
from javaimports.core.errors import Diagnostic, ParseError
from javaimports.parser.models import Import, ParsedFile
from javaimports.parser.scanner import UnresolvedIdentifierScanner, import_from_node

_SNIPPET_MAX = 24


def _load_language() -> tree_sitter.Language:
    return tree_sitter.Language(tree_sitter_java.language())


def _collect_diagnostics(root: Any, filename: str) -> list[Diagnostic]:
    """One diagnostic per ERROR node (not descending into it) and per missing node."""
    diagnostics: list[Diagnostic] = []
    if not root.has_error:
        return diagnostics

    stack = [root]
    while stack:
        node = stack.pop()
        line, column = node.start_point[0] + 1, node.start_point[1]
        if node.is_missing:
            diagnostics.append(Diagnostic(filename, line, column, f"missing '{node.type}'"))
            continue
        if node.type == "ERROR":
            snippet = (node.text or b"").decode("utf-8", errors="replace").strip()
            snippet = snippet.splitlines()[0][:_SNIPPET_MAX] if snippet else ""
            message = f"unexpected '{snippet}'" if snippet else "syntax error"
            diagnostics.append(Diagnostic(filename, line, column, message))
            continue
        if node.has_error:
            stack.extend(reversed(node.children))

    diagnostics.sort(key=lambda d: (d.line, d.column))
    return diagnostics


@dataclass
class JavaParser:
    """
    Java parser producing ``ParsedFile`` objects.

    Usage::

        parser = JavaParser()
        parsed = parser.parse(Path("src/main/java/a/Foo.java"), source)
        parsed.unresolved_identifiers  # {"List", "Bar"}
    """

    options: Options = field(default_factory=Options.defaults)
    _parser: Any = field(default=None, repr=False)

    def __post_init__(self) -> None:
        self._parser = tree_sitter.Parser()
        self._parser.language = _load_language()

    def parse_tree(self, filename: Path | str, source: str | bytes) -> Any:
        """Parse source into a tree-sitter tree.

        Raises:
            ParseError: if the source is not syntactically valid Java.
        """
        content = source.encode("utf-8") if isinstance(source, str) else source
        tree = self._parser.parse(content)
        diagnostics = _collect_diagnostics(tree.root_node, str(filename))
        if diagnostics:
            raise ParseError.from_diagnostics(filename, diagnostics)
        return tree

    def parse(self, filename: Path | str, source: str | bytes) -> ParsedFile:
        """Parse the given Java code into a ``ParsedFile``.

        Raises:
            ParseError: if the input cannot be parsed.
        """
        start = time.perf_counter()
        tree = self.parse_tree(filename, source)

        result = UnresolvedIdentifierScanner().scan(tree.root_node)
        parsed = ParsedFile(
            package_name=result.package_name,
            path=Path(filename),
            top_level_declarations=frozenset(result.top_level_declarations),
            unresolved_identifiers=frozenset(result.unresolved_identifiers),
            superclass_chain=result.superclass_chain,
            class_hierarchy=result.class_hierarchy,
            imports=tuple(result.imports),
        )
        if self.options.debug:
            self.options.logger.debug(
                "parsed_file",
                path=str(filename),
                package=parsed.package_name,
                unresolved=len(parsed.unresolved_identifiers),
                elapsed_ms=round((time.perf_counter() - start) * 1000, 2),
            )
        return parsed

    def parse_path(self, path: Path) -> ParsedFile:
        """Read and parse a file.

        Raises:
            ParseError: if the file cannot be read or parsed.
        """
        try:
            content = path.read_bytes()
        except OSError as e:
            raise ParseError.unreadable(path, e.strerror or str(e)) from e
        return self.parse(path, content)


def parse_import_statement(statement: str) -> Import:
    """Parse one single-name import declaration (``import a.b.C;``).

    Raises:
        ParseError: on invalid syntax, on-demand imports, or anything other
            than exactly one import declaration.
    """
    tree = JavaParser().parse_tree("<import>", statement)
    nodes = [
        n
        for n in tree.root_node.named_children
        if n.type not in ("line_comment", "block_comment")
    ]
    if len(nodes) != 1 or nodes[0].type != "import_declaration":
        raise ParseError.from_diagnostics(
            "<import>", [Diagnostic("<import>", 1, 0, "expected exactly one import declaration")]
        )

    imported = import_from_node(nodes[0])
    if imported is None:
        raise ParseError.from_diagnostics(
            "<import>", [Diagnostic("<import>", 1, 0, "on-demand imports name no single symbol")]
        )
    return imported
