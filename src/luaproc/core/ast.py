"""Host AST for Rust type definitions, built from the tree-sitter Rust grammar.

The builders never look at tree-sitter nodes directly. This module adapts the
concrete syntax tree into a handful of small frozen records that carry the
verbatim source text of everything the descriptors need.
"""

import re
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from tree_sitter import Node
from tree_sitter_language_pack import get_parser

LANGUAGE = "rust"

_COMMENT_TYPES = frozenset({"line_comment", "block_comment"})
_GENERIC_PARAM_TYPES = frozenset(
    {
        "constrained_type_parameter",
        "optional_type_parameter",
        "type_parameter",
        "lifetime_parameter",
        "const_parameter",
    }
)

# Argument lists are parsed as the arguments of a call so that tree-sitter
# accepts exactly the comma-separated expression lists a Rust parser would.
_ARGS_PREFIX = b"const __LUAPROC_ARGS: () = __luaproc(\n"
_ARGS_SUFFIX = b"\n);\n"

_ESCAPES = {"n": "\n", "r": "\r", "t": "\t", "\\": "\\", "0": "\0", "'": "'", '"': '"'}
_ESCAPE_RE = re.compile(r"\\(?:u\{([0-9a-fA-F_]+)\}|x([0-7][0-9a-fA-F])|\n\s*|(.))", re.DOTALL)
_RAW_STRING_RE = re.compile(r'r(#*)"(.*)"\1', re.DOTALL)


@dataclass(frozen=True)
class RawAttribute:
    """One outer attribute, ``#[...]`` or a doc comment."""

    text: str
    path: str
    ident: str | None
    arguments: str | None = None
    value: str | None = None

    @property
    def shape(self) -> Literal["path", "list", "value"]:
        if self.arguments is not None:
            return "list"
        if self.value is not None:
            return "value"
        return "path"


@dataclass(frozen=True)
class RawField:
    name: str | None
    type: str
    attributes: tuple[RawAttribute, ...] = ()


@dataclass(frozen=True)
class RawVariant:
    name: str
    shape: Literal["named", "unnamed", "unit"]
    attributes: tuple[RawAttribute, ...] = ()
    fields: tuple[RawField, ...] = ()
    discriminant: str | None = None


@dataclass(frozen=True)
class GenericParam:
    impl: str
    name: str


@dataclass(frozen=True)
class TypeDefinition:
    kind: Literal["struct", "enum"]
    ident: str
    attributes: tuple[RawAttribute, ...] = ()
    generic_params: tuple[GenericParam, ...] = ()
    where_clause: str | None = None
    fields: tuple[RawField, ...] = ()
    variants: tuple[RawVariant, ...] = ()
    line: int = 0


@dataclass(frozen=True)
class Argument:
    kind: str
    text: str


def _text(node: Node, source: bytes) -> str:
    return source[node.start_byte : node.end_byte].decode("utf-8")


def _quote(text: str) -> str:
    escaped = text.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")
    return f'"{escaped}"'


def _doc_attribute(comment: str) -> RawAttribute | None:
    """Turn an outer doc comment into the ``doc = "..."`` attribute it stands for."""
    if comment.startswith("///") and not comment.startswith("////"):
        body = comment[3:].rstrip("\r\n")
    elif comment.startswith("/**") and not comment.startswith("/***") and comment != "/**/":
        body = comment[3:-2]
    else:
        return None
    value = _quote(body)
    return RawAttribute(text=f"doc = {value}", path="doc", ident="doc", value=value)


def _attribute(item: Node, source: bytes) -> RawAttribute:
    meta = next(child for child in item.named_children if child.type == "attribute")
    path = meta.named_children[0]
    arguments = meta.child_by_field_name("arguments")
    value = meta.child_by_field_name("value")
    return RawAttribute(
        text=_text(meta, source),
        path=_text(path, source),
        ident=_text(path, source) if path.type == "identifier" else None,
        arguments=_text(arguments, source)[1:-1] if arguments is not None else None,
        value=_text(value, source) if value is not None else None,
    )


def _annotated(
    parent: Node,
    source: bytes,
    transparent: frozenset[str] = frozenset(),
) -> Iterator[tuple[tuple[RawAttribute, ...], Node]]:
    """Yield each named child of ``parent`` with the attributes written above it."""
    pending: list[RawAttribute] = []
    for child in parent.named_children:
        if child.type == "attribute_item":
            pending.append(_attribute(child, source))
        elif child.type in _COMMENT_TYPES:
            doc = _doc_attribute(_text(child, source))
            if doc is not None:
                pending.append(doc)
        elif child.type in transparent:
            continue
        else:
            yield tuple(pending), child
            pending = []


def _fields(body: Node | None, source: bytes) -> tuple[RawField, ...]:
    if body is None:
        return ()
    if body.type == "field_declaration_list":
        return tuple(
            RawField(
                name=_text(node.child_by_field_name("name"), source),  # type: ignore[arg-type]
                type=_text(node.child_by_field_name("type"), source),  # type: ignore[arg-type]
                attributes=attrs,
            )
            for attrs, node in _annotated(body, source)
            if node.type == "field_declaration"
        )
    return tuple(
        RawField(name=None, type=_text(node, source), attributes=attrs)
        for attrs, node in _annotated(body, source, transparent=frozenset({"visibility_modifier"}))
    )


def _generic_param(param: Node, source: bytes) -> GenericParam:
    # The impl-header form keeps bounds but drops defaults.
    cut = param.end_byte
    for child in param.children:
        if child.type == "=":
            break
        cut = child.end_byte
    impl = source[param.start_byte : cut].decode("utf-8").strip()

    name = param
    while name.type in _GENERIC_PARAM_TYPES:
        inner = name.child_by_field_name("left") or name.child_by_field_name("name")
        if inner is None:
            break
        name = inner
    return GenericParam(impl=impl, name=_text(name, source))


def _generic_params(node: Node | None, source: bytes) -> tuple[GenericParam, ...]:
    if node is None:
        return ()
    return tuple(_generic_param(param, source) for _, param in _annotated(node, source))


def _where_clause(item: Node, source: bytes) -> str | None:
    for child in item.named_children:
        if child.type == "where_clause":
            return _text(child, source)
    return None


def _variant(attrs: tuple[RawAttribute, ...], node: Node, source: bytes) -> RawVariant:
    body = node.child_by_field_name("body")
    value = node.child_by_field_name("value")
    shape: Literal["named", "unnamed", "unit"]
    if body is None:
        shape = "unit"
    elif body.type == "field_declaration_list":
        shape = "named"
    else:
        shape = "unnamed"
    return RawVariant(
        name=_text(node.child_by_field_name("name"), source),  # type: ignore[arg-type]
        shape=shape,
        attributes=attrs,
        fields=_fields(body, source),
        discriminant=_text(value, source) if value is not None else None,
    )


def _type_definition(attrs: tuple[RawAttribute, ...], item: Node, source: bytes) -> TypeDefinition:
    body = item.child_by_field_name("body")
    common = {
        "ident": _text(item.child_by_field_name("name"), source),  # type: ignore[arg-type]
        "attributes": attrs,
        "generic_params": _generic_params(item.child_by_field_name("type_parameters"), source),
        "where_clause": _where_clause(item, source),
        "line": item.start_point[0] + 1,
    }
    if item.type == "struct_item":
        return TypeDefinition(kind="struct", fields=_fields(body, source), **common)
    variants: tuple[RawVariant, ...] = ()
    if body is not None:
        variants = tuple(
            _variant(variant_attrs, node, source)
            for variant_attrs, node in _annotated(body, source)
            if node.type == "enum_variant"
        )
    return TypeDefinition(kind="enum", variants=variants, **common)


def _collect(parent: Node, source: bytes, out: list[TypeDefinition]) -> None:
    for attrs, node in _annotated(parent, source, transparent=frozenset({"inner_attribute_item"})):
        if node.type in ("struct_item", "enum_item"):
            out.append(_type_definition(attrs, node, source))
        elif node.type == "mod_item":
            body = node.child_by_field_name("body")
            if body is not None:
                _collect(body, source, out)


def parse_source(source_bytes: bytes) -> list[TypeDefinition]:
    """Return every struct and enum definition in a Rust source, in source order."""
    tree = get_parser(LANGUAGE).parse(source_bytes)
    definitions: list[TypeDefinition] = []
    _collect(tree.root_node, source_bytes, definitions)
    return definitions


def parse_file(path: str | Path) -> list[TypeDefinition]:
    file_path = Path(path)
    try:
        source_bytes = file_path.read_bytes()
    except FileNotFoundError:
        raise FileNotFoundError(f"File not found: {path}") from None
    return parse_source(source_bytes)


def parse_arguments(arguments: str) -> list[Argument]:
    """Parse the payload of ``#[name(...)]`` as comma-separated Rust expressions.

    Raises ``ValueError`` when the payload is not such a list.
    """
    source = _ARGS_PREFIX + arguments.encode("utf-8") + _ARGS_SUFFIX
    root = get_parser(LANGUAGE).parse(source).root_node
    if root.has_error:
        raise ValueError(f"not a comma-separated expression list: {arguments!r}")

    items = [child for child in root.named_children if child.type not in _COMMENT_TYPES]
    call = items[0].child_by_field_name("value") if len(items) == 1 else None
    args = call.child_by_field_name("arguments") if call is not None and call.type == "call_expression" else None
    # the payload must not close the call early and smuggle in other items
    if (
        args is None
        or args.start_byte != len(_ARGS_PREFIX) - 2
        or args.end_byte != len(source) - len(_ARGS_SUFFIX) + 2
    ):
        raise ValueError(f"not a comma-separated expression list: {arguments!r}")

    return [
        Argument(kind=child.type, text=_text(child, source))
        for child in args.named_children
        if child.type not in _COMMENT_TYPES and child.type != "attribute_item"
    ]


def _unescape(match: re.Match[str]) -> str:
    if match.group(1) is not None:
        return chr(int(match.group(1).replace("_", ""), 16))
    if match.group(2) is not None:
        return chr(int(match.group(2), 16))
    if match.group(3) is None:
        # line continuation
        return ""
    return _ESCAPES.get(match.group(3), match.group(0))


def string_literal_value(text: str) -> str | None:
    """Decode a Rust string literal, or return None for anything that is not a ``&str`` literal."""
    raw = _RAW_STRING_RE.fullmatch(text)
    if raw is not None:
        return raw.group(2)
    if len(text) < 2 or not text.startswith('"') or not text.endswith('"'):
        return None
    return _ESCAPE_RE.sub(_unescape, text[1:-1])
