"""HTTP client for the co-processor registry API."""

from __future__ import annotations

import base64
import binascii
import json
from typing import Any

import requests

DEFAULT_SOCKET = "127.0.0.1:37281"
DEFAULT_PROOF_PATH = "/var/share/proof.bin"


class ClientError(Exception):
    """Raised when a request fails or the co-processor answers unexpectedly."""


def _encode(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def _decode(text: str) -> bytes:
    try:
        return base64.b64decode(text, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise ClientError(f"invalid base64 data: {exc}") from exc


def _proof_inputs(proof: str) -> str:
    """Extract the public inputs from a base64-encoded proof document."""
    try:
        document = json.loads(_decode(proof))
    except ValueError as exc:
        raise ClientError(f"invalid proof encoding: {exc}") from exc
    inputs = document.get("inputs") if isinstance(document, dict) else None
    if not isinstance(inputs, str):
        raise ClientError("unexpected data format for proof inputs")
    return inputs


class CoprocessorClient:
    """Talks to a co-processor listening on ``socket`` (``host:port``)."""

    def __init__(
        self,
        socket: str = DEFAULT_SOCKET,
        session: requests.Session | None = None,
    ) -> None:
        self.socket = socket
        self.session = session if session is not None else requests.Session()
        self.base_url = f"http://{socket}/api/registry"

    def _request(self, method: str, path: str, payload: Any = None) -> requests.Response:
        url = f"{self.base_url}/{path}"
        try:
            if payload is None:
                return self.session.request(method, url)
            return self.session.request(method, url, json=payload)
        except requests.RequestException as exc:
            raise ClientError(f"request to {url} failed: {exc}") from exc

    @staticmethod
    def _field(response: requests.Response, key: str) -> str:
        try:
            body = response.json()
        except ValueError as exc:
            raise ClientError(f"invalid JSON response: {exc}") from exc
        if not isinstance(body, dict) or key not in body:
            raise ClientError("no data received")
        value = body[key]
        if not isinstance(value, str):
            raise ClientError("invalid data received")
        return value

    def deploy_domain(self, name: str, lib: bytes) -> str:
        """Register a domain library under ``name``; return the domain id."""
        response = self._request("POST", "domain", {"name": name, "lib": _encode(lib)})
        return self._field(response, "domain")

    def deploy_program(self, lib: bytes, circuit: bytes, nonce: int = 0) -> str:
        """Register a program library and its circuit; return the program id."""
        payload = {"lib": _encode(lib), "circuit": _encode(circuit), "nonce": nonce}
        response = self._request("POST", "program", payload)
        return self._field(response, "program")

    def prove(self, program: str, args: Any = None, path: str = DEFAULT_PROOF_PATH) -> str:
        """Request a proof, stored at ``path``; return the raw response text."""
        payload = {"args": args, "payload": {"cmd": "store", "path": str(path)}}
        response = self._request("POST", f"program/{program}/prove", payload)
        return response.text

    def storage(self, program: str, path: str = DEFAULT_PROOF_PATH) -> str:
        """Return the base64 contents of ``path`` on the program's virtual filesystem."""
        response = self._request("POST", f"program/{program}/storage/fs", {"path": str(path)})
        return self._field(response, "data")

    def vk(self, program: str) -> str:
        """Return the base64 verifying key of ``program``."""
        response = self._request("GET", f"program/{program}/vk")
        return self._field(response, "base64")

    def proof_inputs(self, program: str, path: str = DEFAULT_PROOF_PATH) -> str:
        """Return the public inputs of the proof stored at ``path``."""
        raw = _decode(self.storage(program, path))
        try:
            document = json.loads(raw)
        except ValueError as exc:
            raise ClientError(f"invalid stored document: {exc}") from exc
        proof = document.get("proof") if isinstance(document, dict) else None
        if not isinstance(proof, str):
            raise ClientError("unexpected data format for proof")
        return _proof_inputs(proof)