"""Driver-style wrapper types understood by the renderer."""

from sqlinline.types._arrays import (
    BoolArray,
    ByteaArray,
    Float32Array,
    Float64Array,
    GenericArray,
    Int32Array,
    Int64Array,
    PgArray,
    StringArray,
    quote_array_element,
)
from sqlinline.types._nullable import (
    NullBool,
    NullByte,
    NullFloat64,
    Nullable,
    NullInt16,
    NullInt32,
    NullInt64,
    NullString,
    NullTime,
)
from sqlinline.types._ref import Ref

__all__ = (
    "BoolArray",
    "ByteaArray",
    "Float32Array",
    "Float64Array",
    "GenericArray",
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
    "PgArray",
    "Ref",
    "StringArray",
    "quote_array_element",
)
