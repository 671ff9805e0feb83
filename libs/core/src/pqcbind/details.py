from __future__ import annotations
"""Algorithm descriptors.

A descriptor is read once from liboqs when an algorithm is first looked up
and never changes afterwards. KEM and signature descriptors share the common
fields of :class:`AlgorithmDetails` and add their own size fields.
"""
from dataclasses import dataclass, asdict
from typing import Any, ClassVar, Dict


@dataclass(frozen=True)
class AlgorithmDetails:
    name: str
    version: str
    claimed_nist_level: int
    public_key_length: int
    secret_key_length: int

    kind: ClassVar[str] = ""

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        return d

    def to_record(self) -> Dict[str, Any]:
        """camelCase record, the shape other liboqs bindings expose."""
        return {
            "name": self.name,
            "version": self.version,
            "claimedNistLevel": self.claimed_nist_level,
            "publicKeyLength": self.public_key_length,
            "secretKeyLength": self.secret_key_length,
        }


@dataclass(frozen=True)
class KEMDetails(AlgorithmDetails):
    is_ind_cca: bool
    ciphertext_length: int
    shared_secret_length: int

    kind: ClassVar[str] = "kem"

    def to_record(self) -> Dict[str, Any]:
        record = super().to_record()
        record.update(
            isINDCCA=self.is_ind_cca,
            ciphertextLength=self.ciphertext_length,
            sharedSecretLength=self.shared_secret_length,
        )
        return record


@dataclass(frozen=True)
class SignatureDetails(AlgorithmDetails):
    is_euf_cma: bool
    max_signature_length: int

    kind: ClassVar[str] = "sig"

    def to_record(self) -> Dict[str, Any]:
        record = super().to_record()
        record.update(
            isEUFCMA=self.is_euf_cma,
            maxSignatureLength=self.max_signature_length,
        )
        return record
