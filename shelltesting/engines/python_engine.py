"""In-process engine: runspaces are isolated namespaces driven by the interpreter's compiler."""

from __future__ import annotations

import ast
import builtins
import logging
import runpy
from pathlib import Path
from typing import Any, Dict, Optional

from .base import EngineError, ErrorRecord, ModuleImportError, PipelineResult, ResultObject

logger = logging.getLogger(__name__)

SCRIPT_FILENAME = "<runspace>"


class PythonRunspace:
    def __init__(self) -> None:
        self._namespace: Optional[Dict[str, Any]] = None
        self._pipeline: Optional[PipelineResult] = None

    @property
    def is_open(self) -> bool:
        return self._namespace is not None

    def open(self) -> None:
        self._namespace = {
            "__name__": "__runspace__",
            "__builtins__": builtins,
            "write_output": self.write_output,
            "write_error": self.write_error,
        }
        logger.debug("Opened python runspace %#x", id(self))

    def close(self) -> None:
        self._namespace = None
        self._pipeline = None
        logger.debug("Closed python runspace %#x", id(self))

    def write_output(self, *values: Any) -> None:
        """Write values to the running pipeline; unlike bare expressions, None is kept."""
        pipeline = self._current_pipeline()
        for value in values:
            pipeline.output.append(None if value is None else ResultObject(value))

    def write_error(self, message: str) -> None:
        self._current_pipeline().errors.append(ErrorRecord(message=str(message), category="WriteError"))

    def invoke(self, script: str) -> PipelineResult:
        namespace = self._require_namespace()
        pipeline = PipelineResult()
        try:
            tree = ast.parse(script, filename=SCRIPT_FILENAME, mode="exec")
        except SyntaxError as exc:
            pipeline.errors.append(ErrorRecord.from_exception(exc, line=exc.lineno))
            return pipeline

        self._pipeline = pipeline
        try:
            for statement in tree.body:
                self._run_statement(statement, namespace, pipeline)
        finally:
            self._pipeline = None
        return pipeline

    def get_variable(self, name: str) -> Any:
        value = self._require_namespace().get(name)
        return None if value is None else ResultObject(value)

    def import_module(self, path: str) -> None:
        namespace = self._require_namespace()
        pipeline = PipelineResult()
        self._pipeline = pipeline
        try:
            module_globals = runpy.run_path(
                str(path),
                init_globals={"write_output": self.write_output, "write_error": self.write_error},
                run_name=Path(path).stem,
            )
        except Exception as exc:
            raise ModuleImportError(str(path), [ErrorRecord.from_exception(exc)]) from exc
        finally:
            self._pipeline = None

        if pipeline.errors:
            raise ModuleImportError(str(path), pipeline.errors)

        exported = module_globals.get("__all__")
        if exported is None:
            exported = [name for name in module_globals if not name.startswith("_")]
        missing = [name for name in exported if name not in module_globals]
        if missing:
            raise ModuleImportError(
                str(path),
                [ErrorRecord(message=f"__all__ names undefined attributes: {', '.join(missing)}", category="ImportError")],
            )
        for name in exported:
            namespace[name] = module_globals[name]
        logger.debug("Imported %d names from module %s", len(exported), path)

    @staticmethod
    def _run_statement(statement: ast.stmt, namespace: Dict[str, Any], pipeline: PipelineResult) -> None:
        try:
            if isinstance(statement, ast.Expr):
                code = compile(ast.Expression(body=statement.value), SCRIPT_FILENAME, "eval")
                value = eval(code, namespace)
                if value is not None:
                    pipeline.output.append(ResultObject(value))
            else:
                code = compile(ast.Module(body=[statement], type_ignores=[]), SCRIPT_FILENAME, "exec")
                exec(code, namespace)
        except Exception as exc:
            pipeline.errors.append(ErrorRecord.from_exception(exc, line=statement.lineno))

    def _current_pipeline(self) -> PipelineResult:
        if self._pipeline is None:
            raise EngineError("write_output/write_error can only be used while a script is running")
        return self._pipeline

    def _require_namespace(self) -> Dict[str, Any]:
        if self._namespace is None:
            raise EngineError("Runspace is not open")
        return self._namespace


class PythonEngine:
    def create_runspace(self) -> PythonRunspace:
        return PythonRunspace()
