"""Base test case with lazy access to settings, the shell session and the file system helper."""

from __future__ import annotations

import unittest
from typing import Any, Iterable, Mapping, Optional, Type

from .config import DEFAULT_CONFIG_FILE_NAME, AppSettings, disable_certificate_validation
from .engines.base import ScriptEngine
from .engines.python_engine import PythonEngine
from .helpers.filesystem import TempFileManager
from .shell import ShellSession


class ShellTestCase(unittest.TestCase):
    """Configure through class attributes.

    ``config_file_name`` names the settings file behind ``app_settings``.
    ``module_path`` is imported into every new runspace, ``engine_class``
    creates the engine, and ``bypass_ssl`` turns off certificate validation
    once for the whole test run.

    Subclasses overriding ``setUp`` or ``tearDown`` must call ``super()`` so
    the helpers are set up and cleaned up.
    """

    config_file_name: str = DEFAULT_CONFIG_FILE_NAME
    module_path: Optional[str] = None
    engine_class: Type[ScriptEngine] = PythonEngine
    bypass_ssl: bool = False

    def __init__(self, methodName: str = "runTest") -> None:
        super().__init__(methodName)
        self._app_settings: Optional[AppSettings] = None
        self._shell: Optional[ShellSession] = None
        self._file_system: Optional[TempFileManager] = None

    @classmethod
    def setUpClass(cls) -> None:
        super().setUpClass()
        if cls.bypass_ssl:
            disable_certificate_validation()

    @property
    def app_settings(self) -> AppSettings:
        if self._app_settings is None:
            self._app_settings = AppSettings(self.config_file_name)
        return self._app_settings

    @property
    def shell(self) -> ShellSession:
        if self._shell is None:
            self._shell = self.create_shell()
        return self._shell

    @property
    def file_system(self) -> TempFileManager:
        if self._file_system is None:
            self._file_system = TempFileManager()
        return self._file_system

    def create_shell(self) -> ShellSession:
        return ShellSession(self.module_path, self.engine_class())

    def setUp(self) -> None:
        super().setUp()
        if self._file_system is not None:
            self._file_system.set_up()

    def tearDown(self) -> None:
        try:
            if self._file_system is not None:
                self._file_system.tear_down()
        finally:
            if self._shell is not None:
                self._shell.close()
            super().tearDown()

    def assertValueOfVariable(self, value: Any, variable_name: str, msg: Any = None) -> None:
        self.assertEqual(value, self.shell.get_variable_value(variable_name), msg)

    def assertResultOf(self, values: Iterable[Any], command: str, msg: Any = None) -> None:
        self.assertEqual(list(values), list(self.shell.execute(command)), msg)

    def assertContentOf(self, value: str, filename: str, encoding: str = "utf-8", msg: Any = None) -> None:
        self.assertEqual(value, TempFileManager.read_content(filename, encoding), msg)

    @staticmethod
    def newline_join(*strs: str) -> str:
        return "\n".join(strs) + "\n"

    @staticmethod
    def dict_definition(mapping: Mapping[str, str]) -> str:
        """Source code for a dict literal holding ``mapping``'s items as strings."""
        items = ", ".join(f"{str(key)!r}: {str(value)!r}" for key, value in mapping.items())
        return "{" + items + "}"
