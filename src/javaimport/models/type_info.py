"""Importable type models emitted to the JSON-lines index."""

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class TypeKind(StrEnum):
    """Kinds of importable Java types."""

    CLASS = "class"
    INTERFACE = "interface"
    ENUM = "enum"
    ANNOTATION = "@interface"


def render_access_flags(
    *,
    public: bool = False,
    protected: bool = False,
    private: bool = False,
    static: bool = False,
    final: bool = False,
    abstract: bool = False,
) -> list[str]:
    """Render modifiers in a fixed order.

    Only one of public/protected/private is reported, and only one of
    final/abstract.
    """
    flags: list[str] = []
    if public:
        flags.append("public")
    elif protected:
        flags.append("protected")
    elif private:
        flags.append("private")
    if static:
        flags.append("static")
    if final:
        flags.append("final")
    elif abstract:
        flags.append("abstract")
    return flags


class _IndexModel(BaseModel):
    """Base for index records; serialized with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FieldInfo(_IndexModel):
    """A statically importable field."""

    name: str
    type: str
    access_flags: list[str] = Field(default_factory=list)


class MethodInfo(_IndexModel):
    """A statically importable method."""

    name: str
    return_type: str
    parameter_types: list[str] = Field(default_factory=list)
    access_flags: list[str] = Field(default_factory=list)


class TypeInfo(_IndexModel):
    """An importable type and its static members."""

    package: str
    simple_name: str
    type_kind: TypeKind = TypeKind.CLASS
    access_flags: list[str] = Field(default_factory=list)
    inner_classes: list["TypeInfo"] = Field(default_factory=list)
    fields: list[FieldInfo] = Field(default_factory=list)
    methods: list[MethodInfo] = Field(default_factory=list)

    def to_json(self) -> str:
        """Serialize to a single JSON line (without newline)."""
        return self.model_dump_json(by_alias=True)
