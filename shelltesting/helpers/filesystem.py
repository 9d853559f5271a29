"""Temporary file bookkeeping for tests."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Tuple, Union

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class TempFileManager:
    """Creates and registers temporary files, and deletes them again on tear down.

    ``ShellTestCase`` sets this helper up and tears it down automatically.
    """

    def __init__(self) -> None:
        self._created_files: List[Path] = []

    @property
    def registered_files(self) -> Tuple[Path, ...]:
        return tuple(self._created_files)

    def set_up(self) -> None:
        pass

    def tear_down(self) -> None:
        """Delete registered files, newest first, and forget them."""
        for path in reversed(self._created_files):
            path.unlink(missing_ok=True)
            logger.debug("Deleted temp file %s", path)
        self._created_files.clear()

    def register_temp_file(self, *paths: PathLike) -> None:
        self._created_files.extend(Path(p) for p in paths)

    def forget_temp_files(self) -> None:
        self._created_files.clear()

    def create_temp_file(self, path: PathLike, content: str, encoding: str = "utf-8") -> Path:
        path = Path(path)
        with path.open("w", encoding=encoding, newline="") as fh:
            fh.write(content)
        self._created_files.append(path)
        logger.debug("Created temp file %s", path)
        return path

    @staticmethod
    def read_content(path: PathLike, encoding: str = "utf-8") -> str:
        with Path(path).open("r", encoding=encoding, newline="") as fh:
            return fh.read()
