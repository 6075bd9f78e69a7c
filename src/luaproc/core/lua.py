import logging
from pathlib import Path
from typing import Any

from lupa import LuaError, LuaRuntime
from pydantic import BaseModel

from luaproc.core.errors import ScriptExecutionError, ScriptReadError, SerializationError

logger = logging.getLogger(__name__)


def to_lua(runtime: LuaRuntime, value: Any) -> Any:
    """Convert a JSON-shaped Python value into the runtime's native values.

    Mappings become tables keyed by string, sequences become 1-based arrays and
    ``None`` becomes ``nil`` (so a ``None`` entry is simply absent from its table).
    """
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, dict):
        return runtime.table_from({str(k): to_lua(runtime, v) for k, v in value.items() if v is not None})
    if isinstance(value, (list, tuple)):
        return runtime.table_from([to_lua(runtime, item) for item in value])
    raise SerializationError(value)


class LuaBridge:
    """One Lua runtime and its global namespace.

    A bridge is created per processed type definition and never shared.
    """

    def __init__(self, runtime: LuaRuntime | None = None) -> None:
        self.runtime = runtime if runtime is not None else LuaRuntime()

    @property
    def globals(self) -> Any:
        return self.runtime.globals()

    def set_var(self, value: BaseModel, name: str) -> None:
        """Bind a descriptor as the Lua global ``name``."""
        self.globals[name] = to_lua(self.runtime, value.model_dump(mode="json"))
        logger.debug("Bound Lua global %s (%s)", name, type(value).__name__)

    def exec_file(self, path: str | Path) -> None:
        """Run a Lua source file to completion against the current globals."""
        script_path = Path(path)
        try:
            code = script_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError):
            raise ScriptReadError(script_path) from None

        try:
            self.runtime.execute(code)
        except LuaError as e:
            raise ScriptExecutionError(script_path, str(e)) from e
        logger.debug("Executed Lua script %s", script_path)
