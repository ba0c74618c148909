"""Declarative binding of configuration values to object fields."""

from confstack.binding.annotations import BindingDescriptor, Value, parse_binding
from confstack.binding.binder import BoundField, FieldBinder, bound_fields
from confstack.binding.coercion import Float32, Float64, Int32, Int64, coerce

__all__ = [
    "BindingDescriptor",
    "BoundField",
    "FieldBinder",
    "Float32",
    "Float64",
    "Int32",
    "Int64",
    "Value",
    "bound_fields",
    "coerce",
    "parse_binding",
]
