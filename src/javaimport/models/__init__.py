"""Domain models for javaimport."""

from javaimport.models.type_info import (
    FieldInfo,
    MethodInfo,
    TypeInfo,
    TypeKind,
    render_access_flags,
)

__all__ = [
    "FieldInfo",
    "MethodInfo",
    "TypeInfo",
    "TypeKind",
    "render_access_flags",
]
