from collections.abc import Iterable

from luaproc.core.ast import RawAttribute, parse_arguments
from luaproc.core.errors import AttributeParseError
from luaproc.models import Attribute, AttrStyle


def _inner(attr: RawAttribute) -> str:
    if attr.arguments is not None:
        try:
            args = parse_arguments(attr.arguments)
        except ValueError:
            raise AttributeParseError(attr.text) from None
        return ", ".join(arg.text for arg in args)
    if attr.value is not None:
        return attr.value
    return attr.path


def attributes(raw: Iterable[RawAttribute]) -> list[Attribute]:
    """Classify attributes by syntactic shape, keeping declaration order.

    Raises ``AttributeParseError`` for the first list-style attribute whose
    arguments are not a comma-separated expression list.
    """
    return [
        Attribute(
            name=attr.ident,
            inner=_inner(attr),
            outer=attr.text,
            style=AttrStyle(attr.shape),
        )
        for attr in raw
    ]
