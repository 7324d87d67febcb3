"""JVM type descriptor decoding.

Field descriptors such as ``[Ljava/lang/String;`` and method
descriptors such as ``(IJ)V`` are rendered as Java source type names.
"""

from javaimport.errors import DescriptorError

BASE_TYPES: dict[str, str] = {
    "B": "byte",
    "C": "char",
    "D": "double",
    "F": "float",
    "I": "int",
    "J": "long",
    "S": "short",
    "Z": "boolean",
    "V": "void",
}


def _parse_type(descriptor: str, pos: int) -> tuple[str, int]:
    dims = 0
    while pos < len(descriptor) and descriptor[pos] == "[":
        dims += 1
        pos += 1
    if pos >= len(descriptor):
        raise DescriptorError(f"Truncated descriptor: {descriptor!r}")

    tag = descriptor[pos]
    if tag == "L":
        end = descriptor.find(";", pos)
        if end < 0:
            raise DescriptorError(f"Unterminated class type in {descriptor!r}")
        name = descriptor[pos + 1 : end].replace("/", ".")
        pos = end + 1
    elif tag in BASE_TYPES:
        name = BASE_TYPES[tag]
        pos += 1
    else:
        raise DescriptorError(f"Unknown type tag {tag!r} in {descriptor!r}")

    return name + "[]" * dims, pos


def field_type(descriptor: str) -> str:
    """Render a field descriptor as a Java type name."""
    name, pos = _parse_type(descriptor, 0)
    if pos != len(descriptor):
        raise DescriptorError(f"Trailing characters in {descriptor!r}")
    return name


def method_types(descriptor: str) -> tuple[list[str], str]:
    """Render a method descriptor.

    Returns:
        Tuple of (parameter types, return type).
    """
    if not descriptor.startswith("("):
        raise DescriptorError(f"Method descriptor must start with '(': {descriptor!r}")

    params: list[str] = []
    pos = 1
    while pos < len(descriptor) and descriptor[pos] != ")":
        name, pos = _parse_type(descriptor, pos)
        params.append(name)
    if pos >= len(descriptor):
        raise DescriptorError(f"Unterminated parameter list in {descriptor!r}")

    return_type = field_type(descriptor[pos + 1 :])
    return params, return_type
