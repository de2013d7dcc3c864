"""Edited form values and raw input coercion."""

from .values import Array, Expression, FormData, FormValue, IfThen, Value
from .coercion import coerce_value, form_from_dict

__all__ = [
    "Array",
    "Expression",
    "FormData",
    "FormValue",
    "IfThen",
    "Value",
    "coerce_value",
    "form_from_dict",
]
