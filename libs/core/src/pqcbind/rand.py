from __future__ import annotations
"""Process-wide random source used by every liboqs operation.

liboqs keeps a single global generator. Selecting a generator here affects
all handles in the process, so changes go through one lock.

Generators:

* ``system``: operating system entropy (default).
* ``NIST-KAT``: the deterministic AES-256 CTR-DRBG used for known-answer
  tests. It runs in :mod:`pqcbind._drbg` and every draw, including those made
  by key generation, encapsulation and signing, is serialised on its lock.
  Concurrent callers still interleave, so reproducible output needs a single
  consuming thread.
* ``OpenSSL``: OpenSSL's ``RAND_bytes``, when liboqs was built with OpenSSL.
"""
import logging
import threading
from typing import Any, Optional

from . import _core, _drbg
from ._validate import require_bytes, require_count, require_length, require_min_length, require_name
from .errors import UnsupportedAlgorithmError

log = logging.getLogger(__name__)

SYSTEM = _core.SYSTEM_RANDOM
NIST_KAT = _core.NIST_KAT_RANDOM
OPENSSL = "OpenSSL"

NIST_KAT_SEED_LENGTH = _drbg.SEED_LENGTH


class _RandomSource:
    def __init__(self) -> None:
        self._select_lock = threading.Lock()

    @property
    def algorithm(self) -> str:
        return _core.random_algorithm()

    def switch_algorithm(self, name: Any) -> None:
        name = require_name(name)
        with self._select_lock:
            if not _core.select_random(_core.native(), name):
                raise UnsupportedAlgorithmError("Random", name)

    def random_bytes(self, count: Any) -> bytes:
        count = require_count(count)
        if count == 0:
            return b""
        buf = _core.new_buffer(count)
        _core.native().OQS_randombytes(buf, count)
        return _core.to_bytes(buf)

    def init_nist_kat(self, entropy: Any, personalization_string: Optional[Any] = None) -> None:
        """Seed the NIST-KAT generator and select it.

        ``entropy`` must be exactly 48 bytes; ``personalization_string``, when
        given, at least 48 bytes, of which the first 48 are used.
        """
        entropy = require_bytes(entropy, "Entropy")
        pstring = None
        if personalization_string is not None:
            pstring = require_bytes(personalization_string, "Personalization string")
        require_length(entropy, NIST_KAT_SEED_LENGTH, "Entropy")
        if pstring is not None:
            require_min_length(pstring, NIST_KAT_SEED_LENGTH, "Personalization string")

        with self._select_lock:
            lib = _core.native()
            _drbg.kat_drbg.seed(entropy, pstring)
            _core.select_random(lib, NIST_KAT)
        log.debug("NIST-KAT generator seeded")


_source = _RandomSource()

switch_algorithm = _source.switch_algorithm
random_bytes = _source.random_bytes
init_nist_kat = _source.init_nist_kat


def current_algorithm() -> str:
    return _source.algorithm
