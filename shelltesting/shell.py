"""Shell session: runs command sequences in a runspace and unpacks what comes back."""

from __future__ import annotations

import inspect
import logging
from typing import Any, List, Optional, Sequence

from .engines.base import ErrorRecord, ModuleImportError, Runspace, ScriptEngine, unwrap
from .engines.python_engine import PythonEngine
from .errors import ModuleNotBuiltError, NoRunspaceError, ShellExecutionHasErrors

logger = logging.getLogger(__name__)

COMMAND_SEPARATOR = "\n"


def join_commands(commands: Sequence[str]) -> str:
    return COMMAND_SEPARATOR.join(commands)


class ShellSession:
    """Executes commands through a script engine.

    Every ``execute`` call runs in a fresh runspace. The configured module is
    imported first, and the pre- and post-execution commands wrap the given
    commands. The runspace, results and errors of the last call are kept on the
    session for inspection.
    """

    def __init__(self, module_path: Optional[str] = None, engine: Optional[ScriptEngine] = None) -> None:
        self.engine = engine or PythonEngine()
        self.module_path = module_path
        self.last_runspace: Optional[Runspace] = None
        self.last_results: List[Any] = []
        self.last_errors: List[ErrorRecord] = []
        self._pre_execution_cmds: tuple = ()
        self._post_execution_cmds: tuple = ()

    @classmethod
    def for_object(cls, obj: Any, engine: Optional[ScriptEngine] = None) -> "ShellSession":
        """Session that loads the module file defining ``obj`` (a module, class or function)."""
        return cls(inspect.getfile(obj), engine)

    @property
    def pre_execution_commands(self) -> tuple:
        return self._pre_execution_cmds

    @property
    def post_execution_commands(self) -> tuple:
        return self._post_execution_cmds

    def set_pre_execution_commands(self, *commands: str) -> None:
        """Commands run before each ``execute``, e.g. to connect to a server."""
        self._pre_execution_cmds = commands

    def set_post_execution_commands(self, *commands: str) -> None:
        """Commands run after each ``execute``, e.g. to disconnect from a server."""
        self._post_execution_cmds = commands

    def build_script(self, *commands: str) -> str:
        return join_commands([*self._pre_execution_cmds, *commands, *self._post_execution_cmds])

    def execute(self, *commands: str) -> List[Any]:
        self.close()
        self.last_runspace = self.engine.create_runspace()
        self.last_runspace.open()

        if self.module_path is not None:
            self.load_module(self.module_path)

        return self.execute_in_existing_runspace(self.build_script(*commands))

    def execute_in_existing_runspace(self, *commands: str) -> List[Any]:
        """Run commands in the last runspace, without pre/post commands or module import."""
        runspace = self._check_last_runspace_exists()
        self.last_results = []
        self.last_errors = []

        pipeline = runspace.invoke(join_commands(commands))
        self.last_errors = list(pipeline.errors)
        self.last_results = [unwrap(item) for item in pipeline.output]
        logger.debug(
            "Executed script: %d result(s), %d error(s)", len(self.last_results), len(self.last_errors)
        )

        if self.last_errors:
            raise ShellExecutionHasErrors(self.last_errors)
        return self.last_results

    def get_variable_value(self, name: str) -> Any:
        return unwrap(self._check_last_runspace_exists().get_variable(name))

    def load_module(self, module_path: str) -> None:
        runspace = self._check_last_runspace_exists()
        logger.debug("Loading module %s", module_path)
        try:
            runspace.import_module(module_path)
        except ModuleImportError as exc:
            raise ModuleNotBuiltError(module_path) from exc

    def close(self) -> None:
        if self.last_runspace is not None:
            self.last_runspace.close()
            self.last_runspace = None

    def _check_last_runspace_exists(self) -> Runspace:
        if self.last_runspace is None:
            raise NoRunspaceError()
        return self.last_runspace
