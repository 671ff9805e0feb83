from __future__ import annotations
"""Catalogs of the KEM and signature algorithms compiled into liboqs.

Both catalogs read liboqs's algorithm tables once, on first access, and keep
the result for the life of the process.
"""
import ctypes
import logging
import threading
from typing import Callable, Dict, List, Optional

from . import _core
from ._validate import require_name
from .details import AlgorithmDetails, KEMDetails, SignatureDetails
from .errors import UnsupportedAlgorithmError

log = logging.getLogger(__name__)

# liboqs historically aliased a "DEFAULT" entry onto a real algorithm.
_PLACEHOLDER = "default"


class _Catalog:
    def __init__(self, prefix: str, label: str) -> None:
        self.prefix = prefix
        self.label = label
        self._names: Optional[List[str]] = None
        self._details: Dict[str, AlgorithmDetails] = {}
        self._lock = threading.Lock()

    def _fn(self, suffix: str) -> Callable:
        return getattr(_core.native(), f"OQS_{self.prefix}_{suffix}")

    def _load_names(self) -> List[str]:
        names: List[str] = []
        count = self._fn("alg_count")()
        for index in range(count):
            raw = self._fn("alg_identifier")(index)
            if not raw:
                continue
            if not self._fn("alg_is_enabled")(raw):
                continue
            name = raw.decode("utf-8")
            if name.lower() == _PLACEHOLDER:
                continue
            names.append(name)
        log.debug("%s catalog: %d of %d algorithms enabled", self.label, len(names), count)
        return names

    def _enabled(self) -> List[str]:
        if self._names is None:
            with self._lock:
                if self._names is None:
                    self._names = self._load_names()
        return self._names

    def get_enabled_algorithms(self) -> List[str]:
        """Enabled algorithm identifiers, in liboqs order."""
        return list(self._enabled())

    def is_algorithm_enabled(self, name: str) -> bool:
        require_name(name)
        return name in self._enabled()

    def open(self, name: str) -> ctypes._Pointer:
        """Allocate the native liboqs object for an enabled algorithm.

        The caller owns the returned pointer and must hand it back to
        :meth:`close`.
        """
        require_name(name)
        if name not in self._enabled():
            raise UnsupportedAlgorithmError(self.label, name)
        ptr = self._fn("new")(_core.encode_name(name))
        if not ptr:
            raise UnsupportedAlgorithmError(self.label, name)
        return ptr

    def close(self, ptr: ctypes._Pointer) -> None:
        if ptr:
            self._fn("free")(ptr)

    def get_details(self, name: str) -> AlgorithmDetails:
        require_name(name)
        cached = self._details.get(name)
        if cached is not None:
            return cached
        ptr = self.open(name)
        try:
            details = self._describe(ptr.contents)
        finally:
            self.close(ptr)
        with self._lock:
            return self._details.setdefault(name, details)

    def _describe(self, obj: ctypes.Structure) -> AlgorithmDetails:
        raise NotImplementedError


class _KEMCatalog(_Catalog):
    def __init__(self) -> None:
        super().__init__("KEM", "KEM")

    def _describe(self, obj: ctypes.Structure) -> KEMDetails:
        return KEMDetails(
            name=obj.method_name.decode("utf-8"),
            version=obj.alg_version.decode("utf-8"),
            claimed_nist_level=int(obj.claimed_nist_level),
            public_key_length=int(obj.length_public_key),
            secret_key_length=int(obj.length_secret_key),
            is_ind_cca=bool(obj.ind_cca),
            ciphertext_length=int(obj.length_ciphertext),
            shared_secret_length=int(obj.length_shared_secret),
        )


class _SigCatalog(_Catalog):
    def __init__(self) -> None:
        super().__init__("SIG", "Signature")

    def _describe(self, obj: ctypes.Structure) -> SignatureDetails:
        return SignatureDetails(
            name=obj.method_name.decode("utf-8"),
            version=obj.alg_version.decode("utf-8"),
            claimed_nist_level=int(obj.claimed_nist_level),
            public_key_length=int(obj.length_public_key),
            secret_key_length=int(obj.length_secret_key),
            is_euf_cma=bool(obj.euf_cma),
            max_signature_length=int(obj.length_signature),
        )


kems = _KEMCatalog()
sigs = _SigCatalog()

get_enabled_kems = kems.get_enabled_algorithms
is_kem_enabled = kems.is_algorithm_enabled
get_enabled_sigs = sigs.get_enabled_algorithms
is_sig_enabled = sigs.is_algorithm_enabled

