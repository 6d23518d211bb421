"""Builds and starts the co-processor artifacts through docker."""

from __future__ import annotations

import os
import subprocess
from pathlib import Path

COPROCESSOR_IMAGE = "coprocessor:0.1.0"
APP_IMAGE = "valence-coprocessor-app:0.1.0"
COPROCESSOR_PORT = "37281:37281"

_WASM_TARGET = "wasm32-unknown-unknown"


class BuildError(Exception):
    """Raised when a docker step fails or an artifact cannot be read."""


class Builder:
    """Runs docker builds rooted at the project directory ``base``."""

    def __init__(self, base: str | os.PathLike[str] | None = None) -> None:
        root = Path(base) if base is not None else Path.cwd()
        try:
            self.base = root.resolve(strict=True)
        except OSError as exc:
            raise BuildError(f"cannot resolve project directory {root}: {exc}") from exc

    @property
    def _build_dir(self) -> Path:
        return self.base / "docker" / "build"

    @property
    def _volume(self) -> str:
        return f"{self.base}:/usr/src/app"

    def run_docker(self, *args: str) -> None:
        """Run ``docker`` with ``args`` in the project directory; raise on failure."""
        command = ["docker", *args]
        try:
            completed = subprocess.run(command, cwd=self.base)
        except OSError as exc:
            raise BuildError(f"cannot run docker: {exc}") from exc
        if completed.returncode != 0:
            raise BuildError(
                f"command {' '.join(command)!r} failed with status {completed.returncode}"
            )

    def _read(self, path: Path) -> bytes:
        try:
            return path.read_bytes()
        except OSError as exc:
            raise BuildError(f"cannot read artifact {path}: {exc}") from exc

    def _build_app_image(self) -> None:
        self.run_docker("build", "-t", APP_IMAGE, "./docker/deploy")

    def _cargo_wasm(self, crate: str) -> None:
        self.run_docker(
            "run", "--rm", "-it", "-v", self._volume, APP_IMAGE,
            "cargo", "build", "--target", _WASM_TARGET, "--release",
            "--manifest-path", f"./docker/build/{crate}/Cargo.toml",
        )

    def _wasm_path(self, crate: str, artifact: str) -> Path:
        return self._build_dir / crate / "target" / _WASM_TARGET / "release" / artifact

    def start_coprocessor(self) -> None:
        """Build the co-processor image and run it, publishing its port."""
        self.run_docker("build", "-t", COPROCESSOR_IMAGE, "./docker/coprocessor")
        self.run_docker("run", "--rm", "-it", "--init", "-p", COPROCESSOR_PORT, COPROCESSOR_IMAGE)

    def build_domain(self) -> bytes:
        """Build the domain WASM library and return its bytes."""
        self._build_app_image()
        self._cargo_wasm("domain-wasm")
        return self._read(
            self._wasm_path("domain-wasm", "valence_coprocessor_app_domain_wasm.wasm")
        )

    def build_program(self) -> tuple[bytes, bytes]:
        """Build the program WASM library and circuit ELF; return ``(wasm, elf)``."""
        self._build_app_image()
        self._cargo_wasm("program-wasm")
        self.run_docker("run", "--rm", "-it", "-v", self._volume, APP_IMAGE)
        wasm = self._read(
            self._wasm_path("program-wasm", "valence_coprocessor_app_program_wasm.wasm")
        )
        elf = self._read(self._build_dir / "program-circuit" / "target" / "program.elf")
        return wasm, elf