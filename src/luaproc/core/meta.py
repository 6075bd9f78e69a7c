import logging
from pathlib import Path

from luaproc.core.ast import RawAttribute, TypeDefinition, parse_arguments, string_literal_value
from luaproc.core.attributes import attributes
from luaproc.core.errors import ControlAttributeError
from luaproc.models import Generics, TypeMeta

logger = logging.getLogger(__name__)

CONTROL_ATTRIBUTE = "luaproc"


def _script_path(attr: RawAttribute) -> str | None:
    """Return the script path of a well-formed ``#[luaproc("...")]``, else None."""
    if attr.ident != CONTROL_ATTRIBUTE or attr.arguments is None:
        return None
    try:
        args = parse_arguments(attr.arguments)
    except ValueError:
        return None
    if len(args) != 1 or args[0].kind not in ("string_literal", "raw_string_literal"):
        return None
    return string_literal_value(args[0].text)


def find_script_path(definition: TypeDefinition) -> Path:
    """Return the path named by the first well-formed controlling attribute."""
    for attr in definition.attributes:
        script_path = _script_path(attr)
        if script_path is not None:
            return Path(script_path)
    raise ControlAttributeError(definition.ident)


def _generics(definition: TypeDefinition) -> Generics:
    params = definition.generic_params
    if not params:
        return Generics(where=definition.where_clause or "")
    return Generics(
        impl="<" + ", ".join(param.impl for param in params) + ">",
        type="<" + ", ".join(param.name for param in params) + ">",
        where=definition.where_clause or "",
    )


def build_meta(definition: TypeDefinition) -> tuple[TypeMeta, Path]:
    """Build the type-level descriptor and resolve the mandatory script path.

    The controlling attribute is looked up first, so a definition without one
    fails before any attribute is classified.
    """
    script_path = find_script_path(definition)
    meta = TypeMeta(
        ident=definition.ident,
        attributes=attributes(definition.attributes),
        generics=_generics(definition),
    )
    logger.debug("Resolved meta for %s (script %s)", definition.ident, script_path)
    return meta, script_path
