from __future__ import annotations

import logging
from pathlib import Path

import pytest

from pqcbind import CryptoOperationFailedError, _core, _drbg, kems


def test_env_path_is_tried_first(monkeypatch, tmp_path):
    lib = tmp_path / "liboqs.so"
    monkeypatch.setenv("PQCBIND_LIBOQS", str(lib))
    first = next(iter(_core._default_candidates()))
    assert first == lib


def test_install_prefix_candidates(monkeypatch, tmp_path):
    monkeypatch.delenv("PQCBIND_LIBOQS", raising=False)
    monkeypatch.setenv("OQS_INSTALL_PATH", str(tmp_path))
    candidates = list(_core._default_candidates())
    assert tmp_path / "lib" / "liboqs.so" in candidates
    assert Path.home() / "_oqs" / "lib" / "liboqs.so" in candidates


def test_missing_file_is_skipped(tmp_path):
    assert _core._open(tmp_path / "missing" / "liboqs.so") is None


def test_status_codes():
    _core._status_ok(_core.OQS_SUCCESS, "ok")
    with pytest.raises(CryptoOperationFailedError, match="status=-1"):
        _core._status_ok(-1, "KEM decapsulate (X)")


def test_buffers_round_trip():
    buf = _core.buffer_from(b"secret")
    assert _core.to_bytes(buf) == b"secret"
    assert _core.to_bytes(buf, 3) == b"sec"
    assert _core.to_bytes(_core.new_buffer(4)) == bytes(4)


def test_cleanse_zeroises(liboqs):
    buf = _core.buffer_from(b"secret")
    _core.cleanse(buf)
    assert _core.to_bytes(buf) == bytes(6)


def test_liboqs_version(liboqs):
    version = _core.liboqs_version()
    assert isinstance(version, str)
    assert version


class _RandomLib:
    """Stand-in for the randombytes part of liboqs."""

    def __init__(self) -> None:
        self.installed = []

    def OQS_randombytes_switch_algorithm(self, name):
        return _core.OQS_SUCCESS if name.lower() in (b"system", b"openssl") else -1

    def OQS_randombytes_custom_algorithm(self, callback):
        self.installed.append(callback)


@pytest.fixture
def random_selection(monkeypatch):
    monkeypatch.setattr(_core, "_random_algorithm", _core.SYSTEM_RANDOM)
    return _RandomLib()


def test_unknown_env_generator_falls_back_to_system(monkeypatch, caplog, random_selection):
    monkeypatch.setenv("PQCBIND_RANDOM_ALG", "bogus")
    with caplog.at_level(logging.WARNING, logger="pqcbind._core"):
        _core._select_initial_random(random_selection)
    assert _core._random_algorithm == _core.SYSTEM_RANDOM
    assert "bogus" in caplog.text


def test_env_nist_kat_installs_the_drbg(monkeypatch, random_selection):
    monkeypatch.setenv("PQCBIND_RANDOM_ALG", "nist-kat")
    _core._select_initial_random(random_selection)
    assert random_selection.installed == [_drbg._callback]
    assert _core._random_algorithm == _core.NIST_KAT_RANDOM


def test_select_random_reports_rejection(random_selection):
    assert _core.select_random(random_selection, "OpenSSL") is True
    assert _core._random_algorithm == "OpenSSL"
    assert _core.select_random(random_selection, "bogus") is False
    assert _core._random_algorithm == "OpenSSL"


def test_bad_env_generator_never_breaks_loading(liboqs, monkeypatch):
    monkeypatch.setenv("PQCBIND_RANDOM_ALG", "bogus")
    monkeypatch.setattr(_core, "_lib", None)
    monkeypatch.setattr(_core, "_random_algorithm", _core.SYSTEM_RANDOM)
    assert _core.native() is _core.native()
    assert _core.random_algorithm() == _core.SYSTEM_RANDOM
    assert kems.get_enabled_algorithms()
