"""Conversion of parsed class files into index records."""

from javaimport.classfile.descriptors import field_type, method_types
from javaimport.classfile.reader import AccessFlag, ClassFile, MemberInfo
from javaimport.models.type_info import (
    FieldInfo,
    MethodInfo,
    TypeInfo,
    TypeKind,
    render_access_flags,
)

# Not importable types
_PSEUDO_CLASSES = {"module-info", "package-info"}


def _access_flags(flags: AccessFlag) -> list[str]:
    return render_access_flags(
        public=AccessFlag.PUBLIC in flags,
        protected=AccessFlag.PROTECTED in flags,
        private=AccessFlag.PRIVATE in flags,
        static=AccessFlag.STATIC in flags,
        final=AccessFlag.FINAL in flags,
        abstract=AccessFlag.ABSTRACT in flags,
    )


def _is_importable(member: MemberInfo) -> bool:
    flags = member.access_flags
    if AccessFlag.PRIVATE in flags or AccessFlag.STATIC not in flags:
        return False
    # static initializers and compiler generated accessors
    return AccessFlag.SYNTHETIC not in flags and not member.name.startswith("<")


def _type_kind(class_file: ClassFile) -> TypeKind:
    # annotations carry the interface flag as well
    if class_file.is_annotation():
        return TypeKind.ANNOTATION
    if class_file.is_interface():
        return TypeKind.INTERFACE
    if class_file.is_enum():
        return TypeKind.ENUM
    return TypeKind.CLASS


def type_info_from_class_file(class_file: ClassFile) -> TypeInfo | None:
    """Build the index record for a class file.

    Only static, non-private members are kept since those are the
    only ones a static import can reach.

    Returns:
        TypeInfo, or None for module-info and package-info classes.
    """
    if class_file.is_module() or class_file.simple_name in _PSEUDO_CLASSES:
        return None

    fields = [
        FieldInfo(
            name=f.name,
            type=field_type(f.descriptor),
            access_flags=_access_flags(f.access_flags),
        )
        for f in class_file.fields
        if _is_importable(f)
    ]

    methods = []
    for m in class_file.methods:
        if not _is_importable(m):
            continue
        params, return_type = method_types(m.descriptor)
        methods.append(
            MethodInfo(
                name=m.name,
                return_type=return_type,
                parameter_types=params,
                access_flags=_access_flags(m.access_flags),
            )
        )

    return TypeInfo(
        package=class_file.package_name,
        simple_name=class_file.simple_name,
        type_kind=_type_kind(class_file),
        access_flags=_access_flags(class_file.access_flags),
        fields=fields,
        methods=methods,
    )
