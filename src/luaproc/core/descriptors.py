from collections.abc import Iterable
from pathlib import Path

from luaproc.core.ast import RawField, RawVariant, TypeDefinition
from luaproc.core.attributes import attributes
from luaproc.core.fields import fields
from luaproc.core.meta import build_meta
from luaproc.models import Descriptor, EnumDescriptor, StructDescriptor, TypeMeta, Variant, VariantStyle

_VARIANT_STYLES = {
    "named": VariantStyle.STRUCT,
    "unnamed": VariantStyle.TUPLE,
    "unit": VariantStyle.UNIT,
}


def build_struct(meta: TypeMeta, raw_fields: Iterable[RawField]) -> StructDescriptor:
    return StructDescriptor(fields=fields(raw_fields), meta=meta)


def _variant(raw: RawVariant) -> Variant:
    return Variant(
        name=raw.name,
        attributes=attributes(raw.attributes),
        style=_VARIANT_STYLES[raw.shape],
        discriminant=raw.discriminant,
        fields=fields(raw.fields),
    )


def build_enum(meta: TypeMeta, raw_variants: Iterable[RawVariant]) -> EnumDescriptor:
    return EnumDescriptor(variants=[_variant(raw) for raw in raw_variants], fields=[], meta=meta)


def build_descriptor(definition: TypeDefinition) -> tuple[Descriptor, Path]:
    """Build the descriptor of a struct or enum definition together with its script path."""
    meta, script_path = build_meta(definition)
    if definition.kind == "struct":
        return build_struct(meta, definition.fields), script_path
    return build_enum(meta, definition.variants), script_path
