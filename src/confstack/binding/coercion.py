from __future__ import annotations

import struct
import types
from typing import Annotated, Any, Optional, Tuple, Union, get_args, get_origin

from pydantic import AfterValidator, Field, TypeAdapter, ValidationError

from confstack.errors import FormatError, UnsupportedFieldType

SUPPORTED_TYPES: Tuple[type, ...] = (str, int, float, bool)


def _to_single_precision(value: float) -> float:
    try:
        return struct.unpack("f", struct.pack("f", value))[0]
    except OverflowError as exc:
        raise ValueError("value out of range for single precision") from exc


Int32 = Annotated[int, Field(ge=-(2**31), le=2**31 - 1)]
Int64 = Annotated[int, Field(ge=-(2**63), le=2**63 - 1)]
Float32 = Annotated[float, AfterValidator(_to_single_precision)]
Float64 = float


def _strip_annotated(tp: Any) -> Any:
    while get_origin(tp) is Annotated:
        tp = get_args(tp)[0]
    return tp


def _unwrap_optional(tp: Any) -> Tuple[Any, bool]:
    origin = get_origin(tp)
    if origin is Union or origin is types.UnionType:
        args = [arg for arg in get_args(tp) if arg is not type(None)]
        if len(args) == 1 and len(args) != len(get_args(tp)):
            return args[0], True
    return tp, False


def base_type(tp: Any) -> Optional[type]:
    """Return the supported primitive behind `tp`, or None."""
    inner, _ = _unwrap_optional(_strip_annotated(tp))
    inner = _strip_annotated(inner)
    if isinstance(inner, type) and inner in SUPPORTED_TYPES:
        return inner
    return None


def coerce(raw: str, target_type: Any, *, field_name: str) -> Any:
    base = base_type(target_type)
    if base is None:
        raise UnsupportedFieldType(field_name, target_type)
    _, optional = _unwrap_optional(_strip_annotated(target_type))

    text = raw if base is str else raw.strip()
    if optional and text == "":
        return None
    try:
        return TypeAdapter(target_type).validate_python(text)
    except ValidationError as exc:
        raise FormatError(field_name, raw, base.__name__) from exc
