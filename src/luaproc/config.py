import os
from pathlib import Path

from pydantic import BaseModel


class Settings(BaseModel):
    script_root: Path = Path(".")
    struct_global: str = "struct"
    enum_global: str = "enum"

    def global_name(self, kind: str) -> str:
        return self.struct_global if kind == "struct" else self.enum_global


def get_settings(script_root: str | Path | None = None) -> Settings:
    """Read settings from the environment; an explicit ``script_root`` wins."""
    root = script_root if script_root is not None else os.getenv("LUAPROC_SCRIPT_ROOT", ".")
    return Settings(
        script_root=Path(root),
        struct_global=os.getenv("LUAPROC_STRUCT_GLOBAL", "struct"),
        enum_global=os.getenv("LUAPROC_ENUM_GLOBAL", "enum"),
    )
