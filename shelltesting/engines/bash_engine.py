"""Bash engine: a runspace is one long-lived bash process fed through pipes."""

from __future__ import annotations

import logging
import os
import re
import shlex
import shutil
import subprocess
import tempfile
import uuid
from pathlib import Path
from typing import Any, List, Optional

from .base import EngineError, ErrorRecord, ModuleImportError, PipelineResult, ResultObject

logger = logging.getLogger(__name__)

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
CLOSE_TIMEOUT = 5


class BashRunspace:
    def __init__(self, executable: str = "bash") -> None:
        self.executable = executable
        self._process: Optional[subprocess.Popen] = None
        self._workdir: Optional[Path] = None

    @property
    def is_open(self) -> bool:
        return self._process is not None

    def open(self) -> None:
        self._workdir = Path(tempfile.mkdtemp(prefix="shelltesting-"))
        self._process = subprocess.Popen(
            [self.executable, "--noprofile", "--norc"],
            stdin=subprocess.PIPE,
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            env={key: value for key, value in os.environ.items() if key != "BASH_ENV"},
            text=True,
        )
        logger.debug("Opened bash runspace pid=%s", self._process.pid)

    def close(self) -> None:
        process, self._process = self._process, None
        if process is not None:
            try:
                process.stdin.close()
            except BrokenPipeError:
                # the shell already exited; nothing left to flush to
                pass
            try:
                process.wait(timeout=CLOSE_TIMEOUT)
            except subprocess.TimeoutExpired:
                process.kill()
                process.wait()
            process.stdout.close()
            logger.debug("Closed bash runspace pid=%s", process.pid)
        if self._workdir is not None:
            shutil.rmtree(self._workdir, ignore_errors=True)
            self._workdir = None

    def invoke(self, script: str) -> PipelineResult:
        workdir = self._require_workdir()
        script_path = workdir / "script.sh"
        stderr_path = workdir / "stderr.txt"
        script_path.write_text(script + "\n", encoding="utf-8")

        text = self._run(
            f"source {shlex.quote(str(script_path))} </dev/null 2>{shlex.quote(str(stderr_path))}"
        )
        stderr = stderr_path.read_text(encoding="utf-8", errors="replace") if stderr_path.exists() else ""
        return PipelineResult(
            output=[ResultObject(line) for line in text.splitlines()],
            errors=[ErrorRecord(message=line, category="stderr") for line in stderr.splitlines() if line.strip()],
        )

    def get_variable(self, name: str) -> Any:
        if not _IDENTIFIER.match(name):
            raise ValueError(f"Not a valid shell variable name: {name!r}")
        text = self._run(
            f'if [ "${{{name}+set}}" = set ]; then printf "set\\n%s" "${name}"; else printf unset; fi'
        )
        if text == "unset":
            return None
        return ResultObject(text[len("set\n"):])

    def import_module(self, path: str) -> None:
        pipeline = self.invoke(f"source {shlex.quote(str(path))}")
        if pipeline.errors:
            raise ModuleImportError(str(path), pipeline.errors)
        logger.debug("Sourced module %s", path)

    def _run(self, command: str) -> str:
        """Run one command line in the shell and return everything it printed to stdout."""
        process = self._require_process()
        marker = f"__shelltesting_end_{uuid.uuid4().hex}__"
        try:
            process.stdin.write(f"{command}\nprintf '\\n%s\\n' {marker}\n")
            process.stdin.flush()
        except BrokenPipeError as exc:
            raise EngineError("bash runspace is no longer running") from exc

        lines: List[str] = []
        while True:
            line = process.stdout.readline()
            if not line:
                raise EngineError(f"bash exited with status {process.wait()} before the command completed")
            if line.rstrip("\n") == marker:
                break
            lines.append(line)
        # drop the newline printed ahead of the marker
        return "".join(lines)[:-1]

    def _require_process(self) -> subprocess.Popen:
        if self._process is None:
            raise EngineError("Runspace is not open")
        return self._process

    def _require_workdir(self) -> Path:
        self._require_process()
        return self._workdir


class BashEngine:
    def __init__(self, executable: str = "bash") -> None:
        self.executable = executable

    def create_runspace(self) -> BashRunspace:
        return BashRunspace(self.executable)
