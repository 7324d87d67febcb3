"""Class-file parsing for javaimport."""

from javaimport.classfile.descriptors import field_type, method_types
from javaimport.classfile.reader import AccessFlag, ClassFile, MemberInfo, read_class_file
from javaimport.classfile.type_info import type_info_from_class_file

__all__ = [
    "AccessFlag",
    "ClassFile",
    "MemberInfo",
    "field_type",
    "method_types",
    "read_class_file",
    "type_info_from_class_file",
]
