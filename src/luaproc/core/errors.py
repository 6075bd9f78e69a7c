"""Error types raised while processing a type definition.

Every error is fatal for the type definition being processed: nothing is
retried and no partial descriptor or script output survives it.
"""

from pathlib import Path


class LuaprocError(Exception):
    """Base error for luaproc."""

    pass


class ControlAttributeError(LuaprocError):
    """The type definition has no usable ``#[luaproc("...")]`` attribute."""

    def __init__(self, ident: str) -> None:
        super().__init__(f'Failed to find script path for {ident}. Specify #[luaproc("script_path")]')
        self.ident = ident


class AttributeParseError(LuaprocError):
    """An attribute argument list is not a comma-separated expression list."""

    def __init__(self, attribute: str) -> None:
        super().__init__(f"meta list parse args: cannot parse arguments of #[{attribute}]")
        self.attribute = attribute


class SerializationError(LuaprocError):
    """A descriptor value has no Lua representation."""

    def __init__(self, value: object) -> None:
        super().__init__(f"cannot convert {type(value).__name__} value to a Lua value: {value!r}")
        self.value = value


class ScriptReadError(LuaprocError):
    """The Lua source file cannot be opened or read."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"can't open Lua source file {path}")
        self.path = path


class ScriptExecutionError(LuaprocError):
    """The Lua script failed to load or raised an error while running."""

    def __init__(self, path: Path, message: str) -> None:
        super().__init__(f"error in Lua script {path}: {message}")
        self.path = path
        self.message = message
