"""Walker for Java source trees using Tree-sitter."""

from pathlib import Path
from typing import ClassVar

from loguru import logger
from tree_sitter import Node, Parser
from tree_sitter_language_pack import get_parser

from javaimport.emitter import Emitter
from javaimport.errors import WalkError
from javaimport.models.type_info import (
    FieldInfo,
    MethodInfo,
    TypeInfo,
    TypeKind,
    render_access_flags,
)
from javaimport.services.path_filter import PathFilter
from javaimport.walkers.base import WalkStats


class SourceWalker:
    """
    Emit importable types declared in ``.java`` files.

    Extracts:
    - Package declaration
    - Top-level and member classes, interfaces, enums, annotations and records
    - Static, non-private fields, enum constants and methods

    Each walker owns its parser, so one instance must not be shared
    between threads.
    """

    TYPE_DECLARATIONS: ClassVar[dict[str, TypeKind]] = {
        "class_declaration": TypeKind.CLASS,
        "record_declaration": TypeKind.CLASS,
        "interface_declaration": TypeKind.INTERFACE,
        "enum_declaration": TypeKind.ENUM,
        "annotation_type_declaration": TypeKind.ANNOTATION,
    }

    MODIFIER_KEYWORDS: ClassVar[set[str]] = {
        "public",
        "protected",
        "private",
        "static",
        "final",
        "abstract",
    }

    def __init__(self, directory: Path, path_filter: PathFilter, emitter: Emitter) -> None:
        self.directory = directory
        self.path_filter = path_filter
        self.emitter = emitter
        self._parser: Parser | None = None

    def walk(self) -> WalkStats:
        if not self.directory.is_dir():
            raise WalkError(f"Not a directory: {self.directory}", str(self.directory))
        self._load_parser()

        stats = WalkStats()
        for file_path in sorted(self.directory.rglob("*.java")):
            if not file_path.is_file():
                continue

            relpath = file_path.relative_to(self.directory).as_posix()
            if not self.path_filter.apply(relpath):
                stats.filtered += 1
                continue

            try:
                source = file_path.read_bytes()
            except OSError as e:
                logger.warning("Can't read source file {}: {}", file_path, e)
                stats.failed += 1
                continue

            for info in self.extract(source, file_path):
                self.emitter.emit(info)
                stats.emitted += 1

        logger.debug(
            "Walked {}: emitted={} filtered={} failed={}",
            self.directory,
            stats.emitted,
            stats.filtered,
            stats.failed,
        )
        return stats

    def _load_parser(self) -> Parser:
        if self._parser is None:
            try:
                self._parser = get_parser("java")
            except Exception as e:
                # grammars may be fetched on first use, which fails offline
                raise WalkError(
                    f"Java grammar unavailable for {self.directory}: {e}", str(self.directory)
                ) from e
        return self._parser

    def extract(self, source: bytes, file_path: Path | None = None) -> list[TypeInfo]:
        """Parse Java source and return its importable types."""
        tree = self._load_parser().parse(source)
        root = tree.root_node
        if root.has_error:
            logger.debug("Parse errors in {}", file_path or "<source>")

        package = ""
        pkg_node = self._find_child(root, "package_declaration")
        if pkg_node:
            name_node = self._find_child(pkg_node, "scoped_identifier") or self._find_child(
                pkg_node, "identifier"
            )
            if name_node:
                package = self._node_text(name_node, source)

        types: list[TypeInfo] = []
        for child in root.children:
            if child.type in self.TYPE_DECLARATIONS:
                self._extract_type(child, source, package, None, types)
        return types

    # =========================================================================
    # Declarations
    # =========================================================================

    def _extract_type(
        self,
        node: Node,
        source: bytes,
        package: str,
        outer: TypeInfo | None,
        types: list[TypeInfo],
    ) -> None:
        name_node = node.child_by_field_name("name")
        if not name_node:
            return

        kind = self.TYPE_DECLARATIONS[node.type]
        modifiers = self._modifiers(node, source)
        # members of interfaces and annotations are implicitly public static
        if outer is not None and outer.type_kind in (TypeKind.INTERFACE, TypeKind.ANNOTATION):
            modifiers |= {"public", "static"}
        if "private" in modifiers:
            return

        name = self._node_text(name_node, source)
        info = TypeInfo(
            package=package,
            simple_name=f"{outer.simple_name}.{name}" if outer else name,
            type_kind=kind,
            access_flags=self._render(modifiers),
        )
        types.append(info)

        body = node.child_by_field_name("body")
        if body is None:
            return

        members = list(body.children)
        # enum fields and methods live in a nested declarations node
        declarations = self._find_child(body, "enum_body_declarations")
        if declarations:
            members.extend(declarations.children)

        for member in members:
            if member.type in self.TYPE_DECLARATIONS:
                self._extract_type(member, source, package, info, types)
            elif member.type in ("field_declaration", "constant_declaration"):
                info.fields.extend(self._extract_fields(member, source, kind))
            elif member.type == "enum_constant":
                constant = member.child_by_field_name("name")
                if constant:
                    info.fields.append(
                        FieldInfo(
                            name=self._node_text(constant, source),
                            type=info.simple_name,
                            access_flags=["public", "static", "final"],
                        )
                    )
            elif member.type == "method_declaration":
                method = self._extract_method(member, source, kind)
                if method:
                    info.methods.append(method)

    def _extract_fields(self, node: Node, source: bytes, owner: TypeKind) -> list[FieldInfo]:
        modifiers = self._modifiers(node, source)
        if owner in (TypeKind.INTERFACE, TypeKind.ANNOTATION):
            modifiers |= {"public", "static", "final"}
        if "private" in modifiers or "static" not in modifiers:
            return []

        type_node = node.child_by_field_name("type")
        type_name = self._node_text(type_node, source) if type_node else ""

        fields = []
        for declarator in self._find_children(node, "variable_declarator"):
            name_node = declarator.child_by_field_name("name")
            if not name_node:
                continue
            dims = declarator.child_by_field_name("dimensions")
            fields.append(
                FieldInfo(
                    name=self._node_text(name_node, source),
                    type=type_name + (self._compact(dims, source) if dims else ""),
                    access_flags=self._render(modifiers),
                )
            )
        return fields

    def _extract_method(self, node: Node, source: bytes, owner: TypeKind) -> MethodInfo | None:
        modifiers = self._modifiers(node, source)
        if owner == TypeKind.INTERFACE and "private" not in modifiers:
            modifiers.add("public")
        if "private" in modifiers or "static" not in modifiers:
            return None

        name_node = node.child_by_field_name("name")
        if not name_node:
            return None

        type_node = node.child_by_field_name("type")
        return MethodInfo(
            name=self._node_text(name_node, source),
            return_type=self._node_text(type_node, source) if type_node else "void",
            parameter_types=self._parameter_types(node, source),
            access_flags=self._render(modifiers),
        )

    def _parameter_types(self, node: Node, source: bytes) -> list[str]:
        params = node.child_by_field_name("parameters")
        if params is None:
            return []

        types = []
        for param in params.children:
            if param.type == "formal_parameter":
                type_node = param.child_by_field_name("type")
                dims = param.child_by_field_name("dimensions")
                if type_node:
                    type_name = self._node_text(type_node, source)
                    types.append(type_name + (self._compact(dims, source) if dims else ""))
            elif param.type == "spread_parameter":
                type_node = self._first_type_child(param)
                if type_node:
                    types.append(self._node_text(type_node, source) + "[]")
        return types

    # =========================================================================
    # Utilities
    # =========================================================================

    def _modifiers(self, node: Node, source: bytes) -> set[str]:
        modifiers_node = self._find_child(node, "modifiers")
        if not modifiers_node:
            return set()
        words = {self._node_text(c, source) for c in modifiers_node.children}
        return words & self.MODIFIER_KEYWORDS

    def _render(self, modifiers: set[str]) -> list[str]:
        return render_access_flags(**{m: True for m in modifiers})

    def _first_type_child(self, node: Node) -> Node | None:
        for child in node.children:
            if child.type.endswith("_type") or child.type == "type_identifier":
                return child
        return None

    def _compact(self, node: Node, source: bytes) -> str:
        return "".join(self._node_text(node, source).split())

    def _node_text(self, node: Node, source: bytes) -> str:
        """Get text content of a node."""
        return source[node.start_byte : node.end_byte].decode("utf-8", errors="replace")

    def _find_child(self, node: Node, type_name: str) -> Node | None:
        """Find first child of type."""
        for child in node.children:
            if child.type == type_name:
                return child
        return None

    def _find_children(self, node: Node, type_name: str) -> list[Node]:
        """Find all direct children of type."""
        return [c for c in node.children if c.type == type_name]
