from .base import (
    EngineError,
    ErrorRecord,
    ModuleImportError,
    PipelineResult,
    ResultObject,
    Runspace,
    ScriptEngine,
    unwrap,
)
from .bash_engine import BashEngine, BashRunspace
from .python_engine import PythonEngine, PythonRunspace

__all__ = [
    "BashEngine",
    "BashRunspace",
    "EngineError",
    "ErrorRecord",
    "ModuleImportError",
    "PipelineResult",
    "PythonEngine",
    "PythonRunspace",
    "ResultObject",
    "Runspace",
    "ScriptEngine",
    "unwrap",
]
