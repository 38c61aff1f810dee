"""sqlinline: render positional SQL templates with inline literal values for debug logging.

** The rendered text is not meant to be executed. **
** Passing it to a database may lead to SQL injection. **
"""

import logging

from sqlinline import config, core, exceptions, types, typing, utils
from sqlinline.__metadata__ import __version__
from sqlinline.config import RenderConfig
from sqlinline.core import (
    Category,
    FieldDescriptor,
    ValueRenderer,
    attrs_sql_field,
    classify,
    register_fields,
    render,
    render_query,
    sql_field,
    struct_fields,
    unregister_fields,
)
from sqlinline.exceptions import ArrayEncodingError, ImproperConfigurationError, SQLInlineError, TemplateError
from sqlinline.types import (
    BoolArray,
    ByteaArray,
    Float32Array,
    Float64Array,
    GenericArray,
    Int32Array,
    Int64Array,
    NullBool,
    NullByte,
    NullFloat64,
    Nullable,
    NullInt16,
    NullInt32,
    NullInt64,
    NullString,
    NullTime,
    Ref,
    StringArray,
)
from sqlinline.utils.logging import log_query

logging.getLogger("sqlinline").addHandler(logging.NullHandler())

__all__ = (
    "ArrayEncodingError",
    "BoolArray",
    "ByteaArray",
    "Category",
    "FieldDescriptor",
    "Float32Array",
    "Float64Array",
    "GenericArray",
    "ImproperConfigurationError",
    "Int32Array",
    "Int64Array",
    "NullBool",
    "NullByte",
    "NullFloat64",
    "NullInt16",
    "NullInt32",
    "NullInt64",
    "NullString",
    "NullTime",
    "Nullable",
    "Ref",
    "RenderConfig",
    "SQLInlineError",
    "StringArray",
    "TemplateError",
    "ValueRenderer",
    "__version__",
    "attrs_sql_field",
    "classify",
    "config",
    "core",
    "exceptions",
    "log_query",
    "register_fields",
    "render",
    "render_query",
    "sql_field",
    "struct_fields",
    "types",
    "typing",
    "unregister_fields",
    "utils",
)
