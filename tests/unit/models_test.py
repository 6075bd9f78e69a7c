"""Unit tests for Pydantic descriptor models."""

import pytest
from pydantic import ValidationError

from luaproc.models import (
    Attribute,
    AttrStyle,
    EnumDescriptor,
    Field,
    Generics,
    TypeMeta,
    Variant,
    VariantStyle,
)


class TestAttributeModel:
    def test_serializes_style_as_snake_case_string(self) -> None:
        attr = Attribute(name="derive", inner="Debug", outer="derive(Debug)", style=AttrStyle.LIST)
        assert attr.model_dump(mode="json") == {
            "name": "derive",
            "inner": "Debug",
            "outer": "derive(Debug)",
            "style": "list",
        }

    def test_is_immutable(self) -> None:
        attr = Attribute(name=None, inner="x", outer="x", style=AttrStyle.PATH)
        with pytest.raises(ValidationError):
            attr.inner = "y"  # type: ignore[misc]


class TestVariantModel:
    def test_unit_flags(self) -> None:
        variant = Variant(name="Empty", style=VariantStyle.UNIT)
        assert variant.is_unit is True
        assert variant.is_tuple is False

    def test_tuple_flags(self) -> None:
        variant = Variant(name="Pair", style=VariantStyle.TUPLE, fields=[Field(name="_0", type="i32")])
        assert variant.is_tuple is True
        assert variant.is_unit is False

    def test_struct_flags(self) -> None:
        variant = Variant(name="Labeled", style=VariantStyle.STRUCT, fields=[Field(name="text", type="String")])
        assert (variant.is_tuple, variant.is_unit) == (False, False)

    def test_dump_includes_flags(self) -> None:
        data = Variant(name="Empty", style=VariantStyle.UNIT).model_dump(mode="json")
        assert data["style"] == "unit"
        assert data["is_unit"] is True
        assert data["is_tuple"] is False
        assert data["discriminant"] is None

    def test_unit_variant_rejects_fields(self) -> None:
        with pytest.raises(ValidationError):
            Variant(name="Bad", style=VariantStyle.UNIT, fields=[Field(name="x", type="u8")])


class TestDescriptorModels:
    def test_generics_default_to_empty_clauses(self) -> None:
        assert Generics().model_dump() == {"impl": "", "type": "", "where": ""}

    def test_enum_descriptor_reserves_fields(self) -> None:
        descriptor = EnumDescriptor(variants=[], meta=TypeMeta(ident="E"))
        assert descriptor.model_dump(mode="json")["fields"] == []

    def test_meta_requires_ident(self) -> None:
        with pytest.raises(ValidationError):
            TypeMeta()  # type: ignore[call-arg]
