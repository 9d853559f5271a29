"""Exceptions raised by the shell test helpers."""

from typing import Iterable

from .engines.base import ErrorRecord


class ShellTestingError(Exception):
    pass


class ShellExecutionHasErrors(ShellTestingError):
    """Raised when an execution produced error records. The records are kept in ``errors``."""

    def __init__(self, errors: Iterable[ErrorRecord]) -> None:
        self.errors = list(errors)
        lines = [f"Shell execution produced {len(self.errors)} error(s):"]
        lines.extend(f"- {error}" for error in self.errors)
        super().__init__("\n".join(lines))


class ModuleNotBuiltError(ShellTestingError, RuntimeError):
    def __init__(self, module_path: str) -> None:
        self.module_path = module_path
        super().__init__(f"Failed to import module '{module_path}'. Didn't you build it?")


class NoRunspaceError(ShellTestingError, RuntimeError):
    def __init__(self) -> None:
        super().__init__("Cannot execute operation in last runspace, because there is none!")
