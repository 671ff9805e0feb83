from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
CORE_SRC = ROOT / "libs" / "core" / "src"
CLI_SRC = ROOT / "apps" / "cli" / "src"

for candidate in (CLI_SRC, CORE_SRC):
    candidate_str = str(candidate)
    if candidate_str not in sys.path:
        sys.path.insert(0, candidate_str)

from pqcbind import LibraryNotFoundError, kems, rand, sigs  # noqa: E402
from pqcbind import _core  # noqa: E402
from pqcbind_cli.main import default_algorithm  # noqa: E402

# Fast parameter sets preferred for round trips; any enabled one will do.
FAST_KEMS = ["ML-KEM-512", "Kyber512", "ML-KEM-768", "Kyber768", "FrodoKEM-640-AES", "HQC-128"]
FAST_SIGS = ["ML-DSA-44", "Dilithium2", "ML-DSA-65", "Dilithium3", "Falcon-512", "MAYO-1"]


def _liboqs_error() -> str | None:
    try:
        _core.native()
    except LibraryNotFoundError as exc:
        return str(exc)
    return None


@pytest.fixture(scope="session")
def liboqs() -> None:
    reason = _liboqs_error()
    if reason is not None:
        pytest.skip(f"liboqs unavailable: {reason}")


@pytest.fixture(scope="session")
def kem_name(liboqs) -> str:
    name = default_algorithm("PQCBIND_KEM_ALG", FAST_KEMS, kems)
    if name is None:
        enabled = kems.get_enabled_algorithms()
        if not enabled:
            pytest.skip("no KEM algorithm enabled in liboqs")
        name = enabled[0]
    return name


@pytest.fixture(scope="session")
def sig_name(liboqs) -> str:
    name = default_algorithm("PQCBIND_SIG_ALG", FAST_SIGS, sigs)
    if name is None:
        enabled = sigs.get_enabled_algorithms()
        if not enabled:
            pytest.skip("no signature algorithm enabled in liboqs")
        name = enabled[0]
    return name


@pytest.fixture
def system_random(liboqs):
    """Leave the process-wide generator on ``system`` after the test."""
    try:
        yield
    finally:
        rand.switch_algorithm(rand.SYSTEM)
