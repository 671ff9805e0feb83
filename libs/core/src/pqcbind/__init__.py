
from . import rand
from ._core import liboqs_version
from ._handle import HandleState
from .catalog import (
    kems,
    sigs,
    get_enabled_kems,
    get_enabled_sigs,
    is_kem_enabled,
    is_sig_enabled,
)
from .details import AlgorithmDetails, KEMDetails, SignatureDetails
from .errors import (
    PQCBindError,
    InvalidArgumentError,
    InvalidLengthError,
    UnsupportedAlgorithmError,
    PreconditionFailedError,
    CryptoOperationFailedError,
    LibraryNotFoundError,
)
from .kem import EncapsulatedSecret, KeyEncapsulation
from .sig import Signature

__version__ = "0.1.0"

__all__ = [
    "rand",
    "liboqs_version",
    "HandleState",
    "kems",
    "sigs",
    "get_enabled_kems",
    "get_enabled_sigs",
    "is_kem_enabled",
    "is_sig_enabled",
    "AlgorithmDetails",
    "KEMDetails",
    "SignatureDetails",
    "PQCBindError",
    "InvalidArgumentError",
    "InvalidLengthError",
    "UnsupportedAlgorithmError",
    "PreconditionFailedError",
    "CryptoOperationFailedError",
    "LibraryNotFoundError",
    "EncapsulatedSecret",
    "KeyEncapsulation",
    "Signature",
]
