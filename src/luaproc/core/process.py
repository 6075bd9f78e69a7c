import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from luaproc.config import Settings
from luaproc.core.ast import TypeDefinition, parse_arguments, parse_file
from luaproc.core.descriptors import build_descriptor
from luaproc.core.errors import LuaprocError
from luaproc.core.lua import LuaBridge
from luaproc.core.meta import CONTROL_ATTRIBUTE
from luaproc.models import Descriptor

logger = logging.getLogger(__name__)

DERIVE_NAME = "LuaProc"


@dataclass(frozen=True)
class ProcessResult:
    ident: str
    script_path: Path
    descriptor: Descriptor


@dataclass
class FileReport:
    path: Path
    results: list[ProcessResult] = field(default_factory=list)
    failures: list[tuple[str, LuaprocError]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


def _derives_luaproc(definition: TypeDefinition) -> bool:
    for attr in definition.attributes:
        if attr.ident != "derive" or attr.arguments is None:
            continue
        try:
            args = parse_arguments(attr.arguments)
        except ValueError:
            continue
        if any(arg.text.rsplit("::", 1)[-1] == DERIVE_NAME for arg in args):
            return True
    return False


def is_candidate(definition: TypeDefinition) -> bool:
    """A type is processed when it derives ``LuaProc`` or carries a ``luaproc`` attribute."""
    return any(attr.ident == CONTROL_ATTRIBUTE for attr in definition.attributes) or _derives_luaproc(definition)


def find_candidates(definitions: Iterable[TypeDefinition]) -> list[TypeDefinition]:
    return [definition for definition in definitions if is_candidate(definition)]


def resolve_script_path(script_path: Path, settings: Settings) -> Path:
    if script_path.is_absolute():
        return script_path
    return settings.script_root / script_path


def process_definition(definition: TypeDefinition, settings: Settings) -> ProcessResult:
    """Build the descriptor of one type definition and run its Lua script.

    Meta and descriptor are built before any Lua runtime exists, so a
    malformed definition never reaches a script. Each call gets its own runtime.
    """
    descriptor, script_path = build_descriptor(definition)
    logger.debug("Built %s descriptor for %s", definition.kind, definition.ident)

    bridge = LuaBridge()
    bridge.set_var(descriptor, settings.global_name(definition.kind))

    resolved = resolve_script_path(script_path, settings)
    bridge.exec_file(resolved)
    logger.info("Processed %s with %s", definition.ident, resolved)
    return ProcessResult(ident=definition.ident, script_path=resolved, descriptor=descriptor)


def process_file(path: str | Path, settings: Settings) -> FileReport:
    """Process every candidate type of a Rust file, each independently of the others."""
    report = FileReport(path=Path(path))
    for definition in find_candidates(parse_file(path)):
        try:
            report.results.append(process_definition(definition, settings))
        except LuaprocError as e:
            logger.debug("Processing %s failed: %s", definition.ident, e)
            report.failures.append((definition.ident, e))
    return report


def describe_file(path: str | Path) -> list[Descriptor]:
    """Build the descriptors of every candidate type without running any script."""
    return [build_descriptor(definition)[0] for definition in find_candidates(parse_file(path))]
