from __future__ import annotations

import ctypes
import ctypes.util
import logging
import os
import threading
from pathlib import Path
from typing import Iterator, Optional

from . import _drbg
from .errors import CryptoOperationFailedError, LibraryNotFoundError

log = logging.getLogger(__name__)

OQS_SUCCESS = 0

SYSTEM_RANDOM = "system"
NIST_KAT_RANDOM = "NIST-KAT"


class OQSKem(ctypes.Structure):
    # Leading fields only; the function pointers that follow are not touched.
    _fields_ = [
        ("method_name", ctypes.c_char_p),
        ("alg_version", ctypes.c_char_p),
        ("claimed_nist_level", ctypes.c_uint8),
        ("ind_cca", ctypes.c_bool),
        ("length_public_key", ctypes.c_size_t),
        ("length_secret_key", ctypes.c_size_t),
        ("length_ciphertext", ctypes.c_size_t),
        ("length_shared_secret", ctypes.c_size_t),
    ]


class OQSSig(ctypes.Structure):
    _fields_ = [
        ("method_name", ctypes.c_char_p),
        ("alg_version", ctypes.c_char_p),
        ("claimed_nist_level", ctypes.c_uint8),
        ("euf_cma", ctypes.c_bool),
        ("length_public_key", ctypes.c_size_t),
        ("length_secret_key", ctypes.c_size_t),
        ("length_signature", ctypes.c_size_t),
    ]


_c_uint8_p = ctypes.POINTER(ctypes.c_uint8)
_c_size_t = ctypes.c_size_t
_c_char_p = ctypes.c_char_p
_oqs_status = ctypes.c_int
OQSKemPtr = ctypes.POINTER(OQSKem)
OQSSigPtr = ctypes.POINTER(OQSSig)

_LIB_NAMES = ("liboqs.so", "liboqs.dylib", "oqs.dll", "liboqs.dll")


def _default_candidates() -> Iterator[Path]:
    env = os.getenv("PQCBIND_LIBOQS")
    if env:
        yield Path(env)
    found = ctypes.util.find_library("oqs")
    if found:
        yield Path(found)
    prefixes: list[Path] = []
    install_path = os.getenv("OQS_INSTALL_PATH")
    if install_path:
        prefixes.append(Path(install_path))
    # liboqs-python installs liboqs here when it builds it on first import.
    prefixes.append(Path.home() / "_oqs")
    for prefix in prefixes:
        for sub in ("lib", "lib64", "bin"):
            for name in _LIB_NAMES:
                yield prefix / sub / name


def _open(path: Path) -> Optional[ctypes.CDLL]:
    # find_library() may return a bare soname such as "liboqs.so.5".
    if not path.is_file() and path.parent != Path("."):
        return None
    try:
        return ctypes.CDLL(str(path))
    except OSError as exc:
        log.debug("Failed to load liboqs candidate %s: %s", path, exc)
        return None


def _load_library() -> ctypes.CDLL:
    for path in _default_candidates():
        lib = _open(path)
        if lib is not None:
            log.debug("Loaded liboqs from %s", path)
            return lib
    try:
        import oqs  # type: ignore
    except Exception as exc:
        raise LibraryNotFoundError(
            "Unable to locate the liboqs shared library. Install liboqs-python "
            "or point PQCBIND_LIBOQS to the compiled library."
        ) from exc
    log.debug("Using liboqs loaded by liboqs-python")
    return oqs.native()


def _declare(lib: ctypes.CDLL) -> None:
    lib.OQS_init.argtypes = []
    lib.OQS_init.restype = None

    lib.OQS_version.argtypes = []
    lib.OQS_version.restype = _c_char_p

    lib.OQS_MEM_cleanse.argtypes = [ctypes.c_void_p, _c_size_t]
    lib.OQS_MEM_cleanse.restype = None

    lib.OQS_KEM_alg_count.argtypes = []
    lib.OQS_KEM_alg_count.restype = ctypes.c_int
    lib.OQS_KEM_alg_identifier.argtypes = [_c_size_t]
    lib.OQS_KEM_alg_identifier.restype = _c_char_p
    lib.OQS_KEM_alg_is_enabled.argtypes = [_c_char_p]
    lib.OQS_KEM_alg_is_enabled.restype = ctypes.c_int
    lib.OQS_KEM_new.argtypes = [_c_char_p]
    lib.OQS_KEM_new.restype = OQSKemPtr
    lib.OQS_KEM_free.argtypes = [OQSKemPtr]
    lib.OQS_KEM_free.restype = None
    lib.OQS_KEM_keypair.argtypes = [OQSKemPtr, _c_uint8_p, _c_uint8_p]
    lib.OQS_KEM_keypair.restype = _oqs_status
    lib.OQS_KEM_encaps.argtypes = [OQSKemPtr, _c_uint8_p, _c_uint8_p, _c_uint8_p]
    lib.OQS_KEM_encaps.restype = _oqs_status
    lib.OQS_KEM_decaps.argtypes = [OQSKemPtr, _c_uint8_p, _c_uint8_p, _c_uint8_p]
    lib.OQS_KEM_decaps.restype = _oqs_status

    lib.OQS_SIG_alg_count.argtypes = []
    lib.OQS_SIG_alg_count.restype = ctypes.c_int
    lib.OQS_SIG_alg_identifier.argtypes = [_c_size_t]
    lib.OQS_SIG_alg_identifier.restype = _c_char_p
    lib.OQS_SIG_alg_is_enabled.argtypes = [_c_char_p]
    lib.OQS_SIG_alg_is_enabled.restype = ctypes.c_int
    lib.OQS_SIG_new.argtypes = [_c_char_p]
    lib.OQS_SIG_new.restype = OQSSigPtr
    lib.OQS_SIG_free.argtypes = [OQSSigPtr]
    lib.OQS_SIG_free.restype = None
    lib.OQS_SIG_keypair.argtypes = [OQSSigPtr, _c_uint8_p, _c_uint8_p]
    lib.OQS_SIG_keypair.restype = _oqs_status
    lib.OQS_SIG_sign.argtypes = [
        OQSSigPtr, _c_uint8_p, ctypes.POINTER(_c_size_t), _c_uint8_p, _c_size_t, _c_uint8_p,
    ]
    lib.OQS_SIG_sign.restype = _oqs_status
    lib.OQS_SIG_verify.argtypes = [OQSSigPtr, _c_uint8_p, _c_size_t, _c_uint8_p, _c_size_t, _c_uint8_p]
    lib.OQS_SIG_verify.restype = _oqs_status

    lib.OQS_randombytes.argtypes = [_c_uint8_p, _c_size_t]
    lib.OQS_randombytes.restype = None
    lib.OQS_randombytes_switch_algorithm.argtypes = [_c_char_p]
    lib.OQS_randombytes_switch_algorithm.restype = _oqs_status
    lib.OQS_randombytes_custom_algorithm.argtypes = [_drbg.RandomCallback]
    lib.OQS_randombytes_custom_algorithm.restype = None


def select_random(lib: ctypes.CDLL, name: str) -> bool:
    """Point liboqs at the named generator; False if liboqs rejects the name."""
    global _random_algorithm
    if name.lower() == NIST_KAT_RANDOM.lower():
        _drbg.install(lib)
        _random_algorithm = NIST_KAT_RANDOM
    elif lib.OQS_randombytes_switch_algorithm(encode_name(name)) == OQS_SUCCESS:
        _random_algorithm = name
    else:
        return False
    log.debug("Random algorithm switched to %s", _random_algorithm)
    return True


def _select_initial_random(lib: ctypes.CDLL) -> None:
    name = os.getenv("PQCBIND_RANDOM_ALG")
    if name and not select_random(lib, name):
        log.warning("PQCBIND_RANDOM_ALG=%r is not a liboqs random algorithm; using %s", name, SYSTEM_RANDOM)


_lib: Optional[ctypes.CDLL] = None
_lib_lock = threading.Lock()
_random_algorithm = SYSTEM_RANDOM


def native() -> ctypes.CDLL:
    """Return the loaded liboqs handle, loading and initialising it on first use."""
    global _lib
    if _lib is not None:
        return _lib
    with _lib_lock:
        if _lib is None:
            lib = _load_library()
            _declare(lib)
            lib.OQS_init()
            _select_initial_random(lib)
            _lib = lib
    return _lib


def random_algorithm() -> str:
    """Name of the generator liboqs currently draws from."""
    native()
    return _random_algorithm


def liboqs_version() -> str:
    return native().OQS_version().decode("utf-8")


def _status_ok(status: int, context: str) -> None:
    if status == OQS_SUCCESS:
        return
    raise CryptoOperationFailedError(f"{context}: native operation failed (status={status})")


def encode_name(name: str) -> bytes:
    return name.encode("utf-8")


def new_buffer(size: int) -> ctypes.Array:
    return (ctypes.c_uint8 * size)()


def buffer_from(data: bytes) -> ctypes.Array:
    return (ctypes.c_uint8 * len(data)).from_buffer_copy(data)


def to_bytes(buf: ctypes.Array, size: Optional[int] = None) -> bytes:
    return ctypes.string_at(buf, len(buf) if size is None else size)


def cleanse(buf: Optional[ctypes.Array]) -> None:
    """Zeroise a buffer holding secret material."""
    if buf is None or len(buf) == 0:
        return
    native().OQS_MEM_cleanse(ctypes.cast(buf, ctypes.c_void_p), ctypes.sizeof(buf))
