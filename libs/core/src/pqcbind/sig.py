from __future__ import annotations

import ctypes
from typing import Any, Optional

from . import _core
from ._handle import _Handle
from ._validate import require_bytes, require_length, require_max_length
from .catalog import sigs
from .details import SignatureDetails


class Signature(_Handle):
    """A signature algorithm bound to an optional secret key."""

    _catalog = sigs
    _details: SignatureDetails

    def __init__(self, algorithm: str, secret_key: Optional[bytes] = None) -> None:
        super().__init__(algorithm, secret_key)

    def get_details(self) -> SignatureDetails:
        return self._details

    def generate_keypair(self) -> bytes:
        return self._generate(_core.native().OQS_SIG_keypair)

    def sign(self, message: Any) -> bytes:
        """Sign ``message`` with the held secret key.

        Signatures may be shorter than ``max_signature_length``; the returned
        bytes have the length liboqs reports.
        """
        message = require_bytes(message, "Message")
        self._ensure_open()
        self._require_keyed("Signing")
        signature = _core.new_buffer(self._details.max_signature_length)
        signature_len = ctypes.c_size_t(0)
        _core._status_ok(
            _core.native().OQS_SIG_sign(
                self._native,
                signature,
                ctypes.byref(signature_len),
                _core.buffer_from(message),
                len(message),
                self._secret_key,
            ),
            f"Signature sign ({self.algorithm})",
        )
        return _core.to_bytes(signature, min(signature_len.value, len(signature)))

    def verify(self, message: Any, signature: Any, public_key: Any) -> bool:
        """Check ``signature`` over ``message`` under ``public_key``.

        Malformed arguments raise; a signature that simply does not verify
        returns False.
        """
        message = require_bytes(message, "Message")
        signature = require_bytes(signature, "Signature")
        public_key = require_bytes(public_key, "Public key")
        require_length(public_key, self._details.public_key_length, "Public key")
        require_max_length(signature, self._details.max_signature_length, "Signature")
        self._ensure_open()
        status = _core.native().OQS_SIG_verify(
            self._native,
            _core.buffer_from(message),
            len(message),
            _core.buffer_from(signature),
            len(signature),
            _core.buffer_from(public_key),
        )
        return status == _core.OQS_SUCCESS
