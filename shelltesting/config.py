"""Test configuration: dotenv-style settings files and process-wide switches."""

from __future__ import annotations

import logging
import ssl
from collections.abc import Mapping
from pathlib import Path
from typing import Dict, Iterator, Optional, Union

from dotenv import dotenv_values

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE_NAME = "test_config.env"

_certificate_validation_disabled = False


class AppSettings(Mapping):
    """Read-only key/value settings, loaded from ``path`` on first access."""

    def __init__(self, path: Union[str, Path] = DEFAULT_CONFIG_FILE_NAME) -> None:
        self.path = Path(path)
        self._values: Optional[Dict[str, Optional[str]]] = None

    @property
    def values_by_key(self) -> Dict[str, Optional[str]]:
        if self._values is None:
            self._values = dict(dotenv_values(self.path)) if self.path.is_file() else {}
            logger.debug("Loaded %d setting(s) from %s", len(self._values), self.path)
        return self._values

    def __getitem__(self, key: str) -> Optional[str]:
        return self.values_by_key[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self.values_by_key)

    def __len__(self) -> int:
        return len(self.values_by_key)


def disable_certificate_validation() -> None:
    """Stop verifying HTTPS certificates for the rest of the process.

    For test systems without a valid certificate. Repeated calls are no-ops.

    This swaps ``ssl``'s default HTTPS context factory, so it only affects
    clients that use it, such as ``urllib`` and ``http.client``. Clients with
    their own verification settings (``requests``, ``httpx``) are not covered.
    The switch cannot be undone within the process.
    """
    global _certificate_validation_disabled
    if _certificate_validation_disabled:
        return
    ssl._create_default_https_context = ssl._create_unverified_context
    _certificate_validation_disabled = True
    logger.warning("HTTPS certificate validation is disabled for this test run")


def certificate_validation_disabled() -> bool:
    return _certificate_validation_disabled
