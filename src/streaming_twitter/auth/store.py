# SPDX-License-Identifier: LGPL-3.0-only
# Copyright (c) 2026 Mirrowel

"""
Persisted token storage.

A token store loads and saves the credential document keyed by role
(``App``, ``User``). The file-backed store writes atomically with owner
read/write permissions so a failed save never corrupts the previous file.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Optional, Protocol, Union

from ..core.constants import LIB_LOGGER_NAME, TOKEN_FILE_PERMISSION
from ..core.errors import CredentialError, StoreError
from ..core.types import TokenBundle

lib_logger = logging.getLogger(LIB_LOGGER_NAME)


class TokenStore(Protocol):
    """Load/save capability for the credential document."""

    def load(self) -> TokenBundle:
        ...

    def save(self, bundle: TokenBundle) -> None:
        ...


class FileTokenStore:
    """
    JSON token file, e.g.::

        {
          "App": {"Token": "YOUR APP TOKEN HERE", "Secret": "APP SECRET HERE"},
          "User": {"Token": "...", "Secret": "..."}
        }

    Only the ``App`` entry has to be written by hand; ``User`` is added
    after the first successful authorization.
    """

    def __init__(self, path: Union[str, Path]):
        if not str(path):
            raise CredentialError("no token file supplied")
        self.path = Path(path).expanduser()

    def load(self) -> TokenBundle:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise StoreError(f"Could not read token file {self.path}: {e}", e) from e

        try:
            bundle = TokenBundle.from_dict(data)
        except ValueError as e:
            raise StoreError(f"Invalid token file {self.path}: {e}", e) from e

        lib_logger.debug(f"Loaded token file: {self.path.name}")
        return bundle

    def save(self, bundle: TokenBundle) -> None:
        directory = self.path.parent
        tmp_path: Optional[str] = None
        try:
            directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(
                dir=str(directory), prefix=f".{self.path.name}.", suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(bundle.to_dict(), f, indent=2)
            os.chmod(tmp_path, TOKEN_FILE_PERMISSION)
            os.replace(tmp_path, self.path)
            tmp_path = None
        except OSError as e:
            raise StoreError(f"Could not write token file {self.path}: {e}", e) from e
        finally:
            if tmp_path is not None and os.path.exists(tmp_path):
                os.unlink(tmp_path)

        lib_logger.debug(f"Saved token file: {self.path.name}")


class MemoryTokenStore:
    """In-process store for headless deployments and tests."""

    def __init__(self, bundle: Optional[TokenBundle] = None):
        self.bundle = bundle or TokenBundle()
        self.saves = 0

    def load(self) -> TokenBundle:
        return self.bundle

    def save(self, bundle: TokenBundle) -> None:
        self.bundle = bundle
        self.saves += 1


__all__ = ["TokenStore", "FileTokenStore", "MemoryTokenStore"]
