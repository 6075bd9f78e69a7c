from enum import Enum

from pydantic import BaseModel, ConfigDict, computed_field, model_validator


class AttrStyle(str, Enum):
    PATH = "path"
    LIST = "list"
    VALUE = "value"


class VariantStyle(str, Enum):
    STRUCT = "struct"
    TUPLE = "tuple"
    UNIT = "unit"


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class Attribute(_Frozen):
    name: str | None
    inner: str
    outer: str
    style: AttrStyle


class Field(_Frozen):
    name: str
    type: str
    attributes: list[Attribute] = []


class Variant(_Frozen):
    name: str
    attributes: list[Attribute] = []
    style: VariantStyle
    discriminant: str | None = None
    fields: list[Field] = []

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_tuple(self) -> bool:
        return self.style is VariantStyle.TUPLE

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_unit(self) -> bool:
        return self.style is VariantStyle.UNIT

    @model_validator(mode="after")
    def _unit_has_no_fields(self) -> "Variant":
        if self.style is VariantStyle.UNIT and self.fields:
            raise ValueError(f"unit variant {self.name} cannot carry fields")
        return self


class Generics(_Frozen):
    impl: str = ""
    type: str = ""
    where: str = ""


class TypeMeta(_Frozen):
    ident: str
    attributes: list[Attribute] = []
    generics: Generics = Generics()


class StructDescriptor(_Frozen):
    fields: list[Field]
    meta: TypeMeta


class EnumDescriptor(_Frozen):
    variants: list[Variant]
    # reserved, never populated for enums
    fields: list[Field] = []
    meta: TypeMeta


Descriptor = StructDescriptor | EnumDescriptor
