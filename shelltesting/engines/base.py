"""Engine contracts shared by every runspace implementation."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Optional, Protocol


@dataclass
class ResultObject:
    """Engine-side wrapper around a value written to the output pipeline."""

    base_object: Any


def unwrap(item: Any) -> Any:
    if isinstance(item, ResultObject):
        return item.base_object
    return item


@dataclass
class ErrorRecord:
    message: str
    exception: Optional[BaseException] = None
    line: Optional[int] = None
    category: str = ""

    @classmethod
    def from_exception(cls, exc: BaseException, line: Optional[int] = None) -> "ErrorRecord":
        return cls(message=str(exc), exception=exc, line=line, category=type(exc).__name__)

    def __str__(self) -> str:
        where = f" (line {self.line})" if self.line is not None else ""
        prefix = f"{self.category}: " if self.category else ""
        return f"{prefix}{self.message}{where}"


@dataclass
class PipelineResult:
    output: List[Any] = field(default_factory=list)
    errors: List[ErrorRecord] = field(default_factory=list)


class EngineError(RuntimeError):
    """The runspace cannot service the request (closed, or its backend died)."""


class ModuleImportError(Exception):
    def __init__(self, path: str, errors: Optional[List[ErrorRecord]] = None) -> None:
        self.path = path
        self.errors = list(errors or [])
        detail = "; ".join(str(e) for e in self.errors)
        message = f"Cannot import module '{path}'"
        super().__init__(f"{message}: {detail}" if detail else message)


class Runspace(Protocol):
    """An isolated session in which variables and modules persist until closed."""

    @property
    def is_open(self) -> bool:
        ...

    def open(self) -> None:
        ...

    def close(self) -> None:
        ...

    def invoke(self, script: str) -> PipelineResult:
        ...

    def get_variable(self, name: str) -> Any:
        ...

    def import_module(self, path: str) -> None:
        ...


class ScriptEngine(Protocol):
    """Pluggable factory for runspaces."""

    def create_runspace(self) -> Runspace:
        ...
