"""Shared pytest fixtures for javaimport tests."""

import struct
import zipfile
from collections.abc import Callable, Sequence
from pathlib import Path

import pytest

ACC_PUBLIC = 0x0001
ACC_SUPER = 0x0020

Member = tuple[int, str, str]


def build_class_file(
    name: str,
    access: int = ACC_PUBLIC | ACC_SUPER,
    super_name: str | None = "java/lang/Object",
    fields: Sequence[Member] = (),
    methods: Sequence[Member] = (),
    major: int = 52,
) -> bytes:
    """Assemble a minimal but well-formed class file.

    The constant pool starts with a Long constant so readers must
    honour the two-slot rule, and every method carries a dummy
    attribute so readers must skip attributes.
    """
    pool: list[bytes] = []
    indexes: dict[tuple[str, str], int] = {}
    next_index = 1

    def add(entry: bytes, slots: int = 1) -> int:
        nonlocal next_index
        index = next_index
        pool.append(entry)
        next_index += slots
        return index

    def utf8(value: str) -> int:
        key = ("utf8", value)
        if key not in indexes:
            raw = value.encode("utf-8")
            indexes[key] = add(struct.pack(">BH", 1, len(raw)) + raw)
        return indexes[key]

    def klass(value: str) -> int:
        key = ("class", value)
        if key not in indexes:
            name_index = utf8(value)
            indexes[key] = add(struct.pack(">BH", 7, name_index))
        return indexes[key]

    add(struct.pack(">Bq", 5, 42), slots=2)
    add(struct.pack(">BH", 8, utf8("constant")))

    this_index = klass(name)
    super_index = klass(super_name) if super_name else 0
    code_index = utf8("Code")
    source_file_index = utf8("SourceFile")
    source_name_index = utf8("Source.java")

    def member_bytes(members: Sequence[Member], with_attribute: bool) -> bytes:
        out = struct.pack(">H", len(members))
        for flags, member_name, descriptor in members:
            out += struct.pack(">HHH", flags, utf8(member_name), utf8(descriptor))
            if with_attribute:
                out += struct.pack(">HHI", 1, code_index, 4) + b"\x00" * 4
            else:
                out += struct.pack(">H", 0)
        return out

    # members first: they may add constants
    field_part = member_bytes(fields, with_attribute=False)
    method_part = member_bytes(methods, with_attribute=True)

    header = struct.pack(">IHHH", 0xCAFEBABE, 0, major, next_index)
    body = struct.pack(">HHHH", access, this_index, super_index, 0)
    attributes = struct.pack(">HHIH", 1, source_file_index, 2, source_name_index)
    return header + b"".join(pool) + body + field_part + method_part + attributes


@pytest.fixture
def class_bytes() -> Callable[..., bytes]:
    """Factory fixture building class-file bytes."""
    return build_class_file


@pytest.fixture
def write_class(tmp_path: Path) -> Callable[..., Path]:
    """Factory fixture writing a class file below tmp_path/classes."""

    def _write(name: str, **kwargs: object) -> Path:
        file_path = tmp_path / "classes" / f"{name}.class"
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_bytes(build_class_file(name, **kwargs))  # type: ignore[arg-type]
        return file_path

    return _write


@pytest.fixture
def make_jar(tmp_path: Path) -> Callable[..., Path]:
    """Factory fixture writing a jar from {entry name: bytes}."""

    def _make(entries: dict[str, bytes], filename: str = "lib.jar") -> Path:
        jar_path = tmp_path / filename
        with zipfile.ZipFile(jar_path, "w") as zf:
            for entry_name, data in entries.items():
                zf.writestr(entry_name, data)
        return jar_path

    return _make


@pytest.fixture
def write_java_file(tmp_path: Path) -> Callable[[str, str], Path]:
    """Factory fixture writing Java sources below tmp_path/src."""

    def _write(relpath: str, content: str) -> Path:
        file_path = tmp_path / "src" / relpath
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_text(content)
        return file_path

    return _write
