from __future__ import annotations

from typing import Any, NamedTuple, Optional

from . import _core
from ._handle import _Handle
from ._validate import require_bytes, require_length
from .catalog import kems
from .details import KEMDetails


class EncapsulatedSecret(NamedTuple):
    ciphertext: bytes
    shared_secret: bytes


class KeyEncapsulation(_Handle):
    """A KEM algorithm bound to an optional secret key.

    >>> alice = KeyEncapsulation("ML-KEM-768")
    >>> public_key = alice.generate_keypair()
    >>> ciphertext, shared_secret = KeyEncapsulation("ML-KEM-768").encapsulate_secret(public_key)
    >>> alice.decapsulate_secret(ciphertext) == shared_secret
    True
    """

    _catalog = kems
    _details: KEMDetails

    def __init__(self, algorithm: str, secret_key: Optional[bytes] = None) -> None:
        super().__init__(algorithm, secret_key)

    def get_details(self) -> KEMDetails:
        return self._details

    def generate_keypair(self) -> bytes:
        """Generate a keypair, keep the secret key and return the public key.

        Any secret key already held by the handle is zeroised and replaced.
        """
        return self._generate(_core.native().OQS_KEM_keypair)

    def encapsulate_secret(self, public_key: Any) -> EncapsulatedSecret:
        public_key = require_bytes(public_key, "Public key")
        require_length(public_key, self._details.public_key_length, "Public key")
        self._ensure_open()
        ciphertext = _core.new_buffer(self._details.ciphertext_length)
        shared_secret = _core.new_buffer(self._details.shared_secret_length)
        try:
            _core._status_ok(
                _core.native().OQS_KEM_encaps(
                    self._native, ciphertext, shared_secret, _core.buffer_from(public_key)
                ),
                f"KEM encapsulate ({self.algorithm})",
            )
            return EncapsulatedSecret(_core.to_bytes(ciphertext), _core.to_bytes(shared_secret))
        finally:
            _core.cleanse(shared_secret)

    def decapsulate_secret(self, ciphertext: Any) -> bytes:
        ciphertext = require_bytes(ciphertext, "Ciphertext")
        require_length(ciphertext, self._details.ciphertext_length, "Ciphertext")
        self._ensure_open()
        self._require_keyed("Decapsulation")
        shared_secret = _core.new_buffer(self._details.shared_secret_length)
        try:
            _core._status_ok(
                _core.native().OQS_KEM_decaps(
                    self._native, shared_secret, _core.buffer_from(ciphertext), self._secret_key
                ),
                f"KEM decapsulate ({self.algorithm})",
            )
            return _core.to_bytes(shared_secret)
        finally:
            _core.cleanse(shared_secret)
