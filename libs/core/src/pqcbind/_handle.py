from __future__ import annotations

import enum
import logging
from typing import Any

from . import _core
from ._validate import require_bytes, require_length, require_name
from .catalog import _Catalog
from .details import AlgorithmDetails
from .errors import PreconditionFailedError

log = logging.getLogger(__name__)


class HandleState(enum.Enum):
    UNKEYED = "unkeyed"
    KEYED = "keyed"


class _Handle:
    """State shared by KEM and signature handles.

    A handle is bound to one algorithm for its whole life and owns at most
    one secret key. Handles are not synchronised; use one per thread or lock
    around them.
    """

    _catalog: _Catalog

    def __init__(self, algorithm: Any, secret_key: Any = None) -> None:
        self._native = None
        self._secret_key = None
        self._freed = False
        algorithm = require_name(algorithm)
        key = None
        if secret_key is not None:
            key = require_bytes(secret_key, "Secret key")
        self._details = self._catalog.get_details(algorithm)
        self._native = self._catalog.open(algorithm)
        if key is not None:
            # Length is checked when the key is used, not here.
            self._secret_key = _core.buffer_from(key)

    @property
    def details(self) -> AlgorithmDetails:
        return self._details

    @property
    def algorithm(self) -> str:
        return self._details.name

    @property
    def state(self) -> HandleState:
        return HandleState.KEYED if self._secret_key is not None else HandleState.UNKEYED

    @property
    def has_secret_key(self) -> bool:
        return self._secret_key is not None

    def _ensure_open(self) -> None:
        if self._freed:
            raise PreconditionFailedError(f"{type(self).__name__} handle has been freed")

    def _require_keyed(self, operation: str) -> None:
        if self._secret_key is None:
            raise PreconditionFailedError(
                f"{operation} requires a secret key; pass one to the constructor or call generate_keypair()"
            )
        require_length(
            self._secret_key,
            self._details.secret_key_length,
            "Secret key",
        )

    def _replace_secret_key(self, buf) -> None:
        old, self._secret_key = self._secret_key, buf
        _core.cleanse(old)

    def _generate(self, keypair_fn) -> bytes:
        self._ensure_open()
        public_key = _core.new_buffer(self._details.public_key_length)
        secret_key = _core.new_buffer(self._details.secret_key_length)
        try:
            _core._status_ok(
                keypair_fn(self._native, public_key, secret_key),
                f"{self._catalog.label} keypair ({self.algorithm})",
            )
        except Exception:
            _core.cleanse(secret_key)
            raise
        self._replace_secret_key(secret_key)
        log.debug("Generated %s keypair for %s", self._catalog.label, self.algorithm)
        return _core.to_bytes(public_key)

    def export_secret_key(self) -> bytes:
        """Return a copy of the held secret key, exactly as stored."""
        self._ensure_open()
        if self._secret_key is None:
            raise PreconditionFailedError("No secret key to export; call generate_keypair() first")
        return _core.to_bytes(self._secret_key)

    def free(self) -> None:
        """Zeroise the secret key and release the native algorithm object."""
        if self._freed:
            return
        self._freed = True
        self._replace_secret_key(None)
        native, self._native = self._native, None
        if native is not None:
            self._catalog.close(native)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.free()

    def __del__(self) -> None:
        if getattr(self, "_freed", True):
            return
        self.free()

    def __repr__(self) -> str:
        name = self._details.name if getattr(self, "_details", None) else "?"
        return f"{type(self).__name__}(algorithm={name!r}, state={self.state.value})"

