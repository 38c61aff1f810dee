"""sqlinline core: placeholder substitution and value rendering.

Architecture Overview:
- template.py: placeholder scanning and ``render_query``
- classifier.py: ``Category`` and the ordered classification rules
- renderer.py: ``ValueRenderer`` and per-category literal rendering
- fields.py: field descriptors for struct rendering
- pretty.py: optional sqlglot pretty printing
"""

from sqlinline.core.classifier import Category, classify
from sqlinline.core.fields import (
    FieldDescriptor,
    attrs_sql_field,
    register_fields,
    sql_field,
    struct_fields,
    unregister_fields,
)
from sqlinline.core.renderer import ValueRenderer, render
from sqlinline.core.template import render_query, scan_template

__all__ = (
    "Category",
    "FieldDescriptor",
    "ValueRenderer",
    "attrs_sql_field",
    "classify",
    "register_fields",
    "render",
    "render_query",
    "scan_template",
    "sql_field",
    "struct_fields",
    "unregister_fields",
)
