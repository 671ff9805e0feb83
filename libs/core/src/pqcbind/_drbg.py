from __future__ import annotations
"""AES-256 CTR-DRBG used for NIST known-answer tests.

This is the generator from the NIST PQC ``rng.c`` harness (SP 800-90A
CTR_DRBG with AES-256, no derivation function, no reseeding). liboqs releases
after 0.7 keep it only in their test programs, so it is provided here and
handed to liboqs through ``OQS_randombytes_custom_algorithm``.
"""
import ctypes
import threading
from typing import Optional

from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

SEED_LENGTH = 48
_KEY_LENGTH = 32
_BLOCK = 16

RandomCallback = ctypes.CFUNCTYPE(None, ctypes.POINTER(ctypes.c_uint8), ctypes.c_size_t)


def _xor(a: bytes, b: bytes) -> bytes:
    return bytes(x ^ y for x, y in zip(a, b))


class CtrDrbg:
    """Deterministic byte generator; every call is serialised on one lock.

    A fresh instance starts from an all-zero key and counter, which is also
    the state liboqs's own copy had before it was seeded.
    """

    def __init__(self) -> None:
        self._key = bytes(_KEY_LENGTH)
        self._v = 0
        self._reseed_counter = 1
        self._lock = threading.Lock()

    def _counter_blocks(self, count: int) -> bytes:
        out = bytearray()
        for _ in range(count):
            self._v = (self._v + 1) % (1 << 128)
            out += self._v.to_bytes(_BLOCK, "big")
        return bytes(out)

    def _encrypt(self, blocks: bytes) -> bytes:
        encryptor = Cipher(algorithms.AES(self._key), modes.ECB()).encryptor()
        return encryptor.update(blocks) + encryptor.finalize()

    def _update(self, provided: Optional[bytes] = None) -> None:
        temp = self._encrypt(self._counter_blocks(3))
        if provided is not None:
            temp = _xor(temp, provided)
        self._key = temp[:_KEY_LENGTH]
        self._v = int.from_bytes(temp[_KEY_LENGTH:], "big")

    def seed(self, entropy: bytes, personalization: Optional[bytes] = None) -> None:
        material = entropy[:SEED_LENGTH]
        if personalization is not None:
            material = _xor(material, personalization[:SEED_LENGTH])
        with self._lock:
            self._key = bytes(_KEY_LENGTH)
            self._v = 0
            self._update(material)
            self._reseed_counter = 1

    def generate(self, length: int) -> bytes:
        with self._lock:
            blocks = -(-length // _BLOCK)
            out = self._encrypt(self._counter_blocks(blocks))[:length]
            self._update()
            self._reseed_counter += 1
        return out


kat_drbg = CtrDrbg()


def _fill(out, length) -> None:
    data = kat_drbg.generate(length)
    ctypes.memmove(out, data, length)


# liboqs keeps only the raw function pointer; this reference keeps it alive.
_callback = RandomCallback(_fill)


def install(lib: ctypes.CDLL) -> None:
    """Route liboqs's randombytes through :data:`kat_drbg`."""
    lib.OQS_randombytes_custom_algorithm(_callback)
