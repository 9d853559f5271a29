from .config import AppSettings, DEFAULT_CONFIG_FILE_NAME, disable_certificate_validation
from .engines import BashEngine, ErrorRecord, PythonEngine, ResultObject
from .errors import ModuleNotBuiltError, NoRunspaceError, ShellExecutionHasErrors, ShellTestingError
from .helpers import TempFileManager, TestHelper
from .shell import ShellSession, join_commands
from .testbase import ShellTestCase

__all__ = [
    "AppSettings",
    "BashEngine",
    "DEFAULT_CONFIG_FILE_NAME",
    "ErrorRecord",
    "ModuleNotBuiltError",
    "NoRunspaceError",
    "PythonEngine",
    "ResultObject",
    "ShellExecutionHasErrors",
    "ShellSession",
    "ShellTestCase",
    "ShellTestingError",
    "TempFileManager",
    "TestHelper",
    "disable_certificate_validation",
    "join_commands",
]
