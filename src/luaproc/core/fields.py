from collections.abc import Iterable

from luaproc.core.ast import RawField
from luaproc.core.attributes import attributes
from luaproc.models import Field


def fields(raw: Iterable[RawField]) -> list[Field]:
    """Project fields in declaration order; unnamed fields become ``_0``, ``_1``, ..."""
    return [
        Field(
            name=field.name if field.name is not None else f"_{index}",
            type=field.type,
            attributes=attributes(field.attributes),
        )
        for index, field in enumerate(raw)
    ]
