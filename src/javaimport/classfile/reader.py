"""Minimal JVM class-file reader.

Reads just enough of the class-file format to describe an importable
type: the constant pool, the class access flags and name, and the
fields and methods with their descriptors. Attributes are skipped.
"""

import struct
from dataclasses import dataclass, field
from enum import IntFlag

from javaimport.errors import ClassFileError

MAGIC = 0xCAFEBABE
# JDK 1.0.2
MIN_MAJOR_VERSION = 45

# Constant pool tags and the fixed size of their payload.
CONSTANT_UTF8 = 1
CONSTANT_CLASS = 7
CONSTANT_LONG = 5
CONSTANT_DOUBLE = 6
_FIXED_SIZE_TAGS: dict[int, int] = {
    3: 4,  # Integer
    4: 4,  # Float
    5: 8,  # Long
    6: 8,  # Double
    7: 2,  # Class
    8: 2,  # String
    9: 4,  # Fieldref
    10: 4,  # Methodref
    11: 4,  # InterfaceMethodref
    12: 4,  # NameAndType
    15: 3,  # MethodHandle
    16: 2,  # MethodType
    17: 4,  # Dynamic
    18: 4,  # InvokeDynamic
    19: 2,  # Module
    20: 2,  # Package
}


class AccessFlag(IntFlag):
    """Access and property flags shared by classes, fields and methods."""

    PUBLIC = 0x0001
    PRIVATE = 0x0002
    PROTECTED = 0x0004
    STATIC = 0x0008
    FINAL = 0x0010
    SUPER = 0x0020
    VOLATILE = 0x0040
    TRANSIENT = 0x0080
    NATIVE = 0x0100
    INTERFACE = 0x0200
    ABSTRACT = 0x0400
    STRICT = 0x0800
    SYNTHETIC = 0x1000
    ANNOTATION = 0x2000
    ENUM = 0x4000
    MODULE = 0x8000


@dataclass(frozen=True)
class MemberInfo:
    """A field or method declared by a class."""

    name: str
    descriptor: str
    access_flags: AccessFlag


@dataclass(frozen=True)
class ClassFile:
    """Parsed view of a class file.

    Attributes:
        name: Binary name with slashes, e.g. ``java/util/Map$Entry``.
        access_flags: Class access flags.
        fields: Declared fields.
        methods: Declared methods.
    """

    name: str
    access_flags: AccessFlag
    fields: list[MemberInfo] = field(default_factory=list)
    methods: list[MemberInfo] = field(default_factory=list)

    @property
    def package_name(self) -> str:
        """Dotted package name, empty for the default package."""
        pkg, _, _ = self.name.rpartition("/")
        return pkg.replace("/", ".")

    @property
    def simple_name(self) -> str:
        """Name without package; nested classes are joined with dots."""
        return self.name.rpartition("/")[2].replace("$", ".")

    def is_interface(self) -> bool:
        return AccessFlag.INTERFACE in self.access_flags

    def is_annotation(self) -> bool:
        return AccessFlag.ANNOTATION in self.access_flags

    def is_enum(self) -> bool:
        return AccessFlag.ENUM in self.access_flags

    def is_module(self) -> bool:
        return AccessFlag.MODULE in self.access_flags


def decode_modified_utf8(raw: bytes) -> str:
    """Decode the JVM's modified UTF-8.

    NUL is stored as ``C0 80`` and supplementary characters as
    surrogate pairs.
    """
    text = raw.replace(b"\xc0\x80", b"\x00").decode("utf-8", errors="surrogatepass")
    return text.encode("utf-16", errors="surrogatepass").decode("utf-16", errors="replace")


class _Reader:
    def __init__(self, data: bytes, file_path: str) -> None:
        self._data = data
        self._pos = 0
        self._file_path = file_path

    def take(self, size: int) -> bytes:
        end = self._pos + size
        if end > len(self._data):
            raise ClassFileError(
                f"Truncated class file at offset {self._pos}", self._file_path
            )
        chunk = self._data[self._pos : end]
        self._pos = end
        return chunk

    def u2(self) -> int:
        value: int = struct.unpack(">H", self.take(2))[0]
        return value

    def u4(self) -> int:
        value: int = struct.unpack(">I", self.take(4))[0]
        return value


class _ConstantPool:
    def __init__(self, reader: _Reader, file_path: str) -> None:
        self._file_path = file_path
        self._utf8: dict[int, str] = {}
        self._classes: dict[int, int] = {}

        count = reader.u2()
        index = 1
        while index < count:
            tag = reader.take(1)[0]
            if tag == CONSTANT_UTF8:
                raw = reader.take(reader.u2())
                try:
                    self._utf8[index] = decode_modified_utf8(raw)
                except UnicodeDecodeError as e:
                    raise ClassFileError(
                        f"Invalid Utf8 constant at index {index}: {e}", file_path
                    ) from e
            elif tag == CONSTANT_CLASS:
                self._classes[index] = reader.u2()
            elif tag in _FIXED_SIZE_TAGS:
                reader.take(_FIXED_SIZE_TAGS[tag])
            else:
                raise ClassFileError(
                    f"Unknown constant pool tag {tag} at index {index}", file_path
                )
            # 8-byte constants occupy two slots
            index += 2 if tag in (CONSTANT_LONG, CONSTANT_DOUBLE) else 1

    def utf8(self, index: int) -> str:
        try:
            return self._utf8[index]
        except KeyError:
            raise ClassFileError(
                f"Constant pool index {index} is not a Utf8 entry", self._file_path
            ) from None

    def class_name(self, index: int) -> str:
        try:
            return self.utf8(self._classes[index])
        except KeyError:
            raise ClassFileError(
                f"Constant pool index {index} is not a Class entry", self._file_path
            ) from None


def _skip_attributes(reader: _Reader) -> None:
    for _ in range(reader.u2()):
        reader.u2()
        reader.take(reader.u4())


def _read_members(reader: _Reader, pool: _ConstantPool) -> list[MemberInfo]:
    members = []
    for _ in range(reader.u2()):
        flags = AccessFlag(reader.u2())
        name = pool.utf8(reader.u2())
        descriptor = pool.utf8(reader.u2())
        _skip_attributes(reader)
        members.append(MemberInfo(name=name, descriptor=descriptor, access_flags=flags))
    return members


def read_class_file(data: bytes, file_path: str = "<bytes>") -> ClassFile:
    """Parse class-file bytes.

    Args:
        data: Raw contents of a ``.class`` file.
        file_path: Used in error messages only.

    Returns:
        Parsed ClassFile.

    Raises:
        ClassFileError: If the data is not a well-formed class file.
    """
    reader = _Reader(data, file_path)
    if reader.u4() != MAGIC:
        raise ClassFileError("Not a class file (bad magic)", file_path)

    reader.u2()  # minor version
    major = reader.u2()
    if major < MIN_MAJOR_VERSION:
        raise ClassFileError(f"Unsupported class file version {major}", file_path)
    pool = _ConstantPool(reader, file_path)

    access_flags = AccessFlag(reader.u2())
    name = pool.class_name(reader.u2())
    super_index = reader.u2()
    if super_index:
        pool.class_name(super_index)

    for _ in range(reader.u2()):
        reader.u2()  # interfaces

    fields = _read_members(reader, pool)
    methods = _read_members(reader, pool)

    return ClassFile(
        name=name,
        access_flags=access_flags,
        fields=fields,
        methods=methods,
    )
