
from __future__ import annotations
import json
import logging
import os
from typing import Any, Optional, Sequence

import typer

from pqcbind import (
    KeyEncapsulation,
    PQCBindError,
    Signature,
    kems,
    liboqs_version,
    rand,
    sigs,
)
from pqcbind import __version__ as pqcbind_version

app = typer.Typer(add_completion=False, help="liboqs KEM / signature binding CLI")

# Tried in order when no algorithm is given and no env override is set.
KEM_CANDIDATES = ["ML-KEM-768", "ML-KEM-512", "Kyber768", "Kyber512"]
SIG_CANDIDATES = ["ML-DSA-65", "ML-DSA-44", "Dilithium3", "Dilithium2", "Falcon-512"]


def default_algorithm(env_var: str, candidates: Sequence[str], catalog: Any) -> Optional[str]:
    """First enabled name among $env_var and ``candidates``, or None."""
    preferred = os.getenv(env_var)
    names = [preferred] if preferred else []
    names += [name for name in candidates if name != preferred]
    return next((name for name in names if catalog.is_algorithm_enabled(name)), None)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _fail(exc: Exception) -> None:
    typer.echo(f"error: {exc}", err=True)
    raise typer.Exit(code=1)


@app.command()
def version() -> None:
    """Show the binding and liboqs versions."""
    try:
        native = liboqs_version()
    except PQCBindError as exc:
        _fail(exc)
    typer.echo(f"pqcbind {pqcbind_version} (liboqs {native})")


@app.command("list-kems")
def list_kems() -> None:
    """List KEM algorithms enabled in liboqs."""
    try:
        names = kems.get_enabled_algorithms()
    except PQCBindError as exc:
        _fail(exc)
    for name in names:
        typer.echo(f"- {name}")


@app.command("list-sigs")
def list_sigs() -> None:
    """List signature algorithms enabled in liboqs."""
    try:
        names = sigs.get_enabled_algorithms()
    except PQCBindError as exc:
        _fail(exc)
    for name in names:
        typer.echo(f"- {name}")


@app.command()
def details(name: str) -> None:
    """Print the descriptor of a KEM or signature algorithm as JSON."""
    try:
        if kems.is_algorithm_enabled(name):
            info = kems.get_details(name)
        elif sigs.is_algorithm_enabled(name):
            info = sigs.get_details(name)
        else:
            typer.echo(f"error: {name!r} is not an enabled KEM or signature algorithm", err=True)
            raise typer.Exit(code=1)
    except PQCBindError as exc:
        _fail(exc)
    typer.echo(json.dumps(info.to_record(), indent=2))


def _demo_kem(name: str) -> None:
    with KeyEncapsulation(name) as alice, KeyEncapsulation(name) as bob:
        public_key = alice.generate_keypair()
        ciphertext, bob_secret = bob.encapsulate_secret(public_key)
        alice_secret = alice.decapsulate_secret(ciphertext)
    ok = alice_secret == bob_secret
    typer.echo(
        f"[KEM] {name}: shared secrets match={ok} "
        f"(pk={len(public_key)}B, ct={len(ciphertext)}B, ss={len(bob_secret)}B)"
    )
    if not ok:
        raise typer.Exit(code=1)


def _demo_sig(name: str, message: bytes) -> None:
    with Signature(name) as signer:
        public_key = signer.generate_keypair()
        signature = signer.sign(message)
        ok = signer.verify(message, signature, public_key)
    typer.echo(f"[SIG] {name}: verify={ok} (pk={len(public_key)}B, sig={len(signature)}B)")
    if not ok:
        raise typer.Exit(code=1)


@app.command()
def demo(
    name: Optional[str] = typer.Argument(None, help="Algorithm name; defaults to PQCBIND_KEM_ALG or a common KEM."),
    message: str = typer.Option("hello", help="Message used for signature demos."),
) -> None:
    """Run a round trip with one algorithm (KEM encaps/decaps or sign/verify)."""
    try:
        if name is None:
            name = default_algorithm("PQCBIND_KEM_ALG", KEM_CANDIDATES, kems)
            if name is None:
                name = default_algorithm("PQCBIND_SIG_ALG", SIG_CANDIDATES, sigs)
            if name is None:
                typer.echo("error: no default algorithm is enabled in liboqs", err=True)
                raise typer.Exit(code=1)
        if kems.is_algorithm_enabled(name):
            _demo_kem(name)
        elif sigs.is_algorithm_enabled(name):
            _demo_sig(name, message.encode("utf-8"))
        else:
            typer.echo(f"error: {name!r} is not an enabled KEM or signature algorithm", err=True)
            raise typer.Exit(code=1)
    except PQCBindError as exc:
        _fail(exc)


@app.command("random-bytes")
def random_bytes(
    count: int = typer.Argument(..., min=0, help="Number of bytes to generate."),
    algorithm: Optional[str] = typer.Option(None, "--algorithm", "-a", help="Switch the generator first (system, OpenSSL, ...)."),
) -> None:
    """Print COUNT random bytes from liboqs as hex."""
    try:
        if algorithm is not None:
            rand.switch_algorithm(algorithm)
        data = rand.random_bytes(count)
    except PQCBindError as exc:
        _fail(exc)
    typer.echo(data.hex())


def app_main():
    app()


if __name__ == "__main__":
    app_main()
