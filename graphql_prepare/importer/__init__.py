"""
Schema importer.

Flattens a schema file and the files it imports through
`# import ... from "..."` directives into one schema document.
"""

from __future__ import annotations

from .directives import ImportDirective, parse_import_line, parse_imports
from .schema_importer import SchemaImporter, SchemaImportError, import_schema

__all__ = [
    "ImportDirective",
    "SchemaImporter",
    "SchemaImportError",
    "import_schema",
    "parse_import_line",
    "parse_imports",
]
