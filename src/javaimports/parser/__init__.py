"""Java source analysis."""

from javaimports.parser.models import Import, ParsedFile
from javaimports.parser.parser import JavaParser, parse_import_statement
from javaimports.parser.scanner import ScanResult, UnresolvedIdentifierScanner

__all__ = [
    "Import",
    "JavaParser",
    "ParsedFile",
    "ScanResult",
    "UnresolvedIdentifierScanner",
    "parse_import_statement",
]
