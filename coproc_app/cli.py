"""Command line interface for building, deploying and querying the co-processor."""

from __future__ import annotations

import argparse
import ipaddress
import json
import sys
from typing import Sequence

from .builder import BuildError, Builder
from .client import DEFAULT_PROOF_PATH, DEFAULT_SOCKET, ClientError, CoprocessorClient

_U64_MAX = (1 << 64) - 1


def _socket(text: str) -> str:
    host, sep, port_text = text.rpartition(":")
    if not sep or not host:
        raise argparse.ArgumentTypeError(f"invalid socket address: {text!r}")
    bracketed = host.startswith("[") and host.endswith("]")
    if bracketed:
        host = host[1:-1]
    try:
        addr = ipaddress.ip_address(host)
        port = int(port_text)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid socket address: {text!r}") from exc
    if not 0 <= port <= 65535 or bracketed != (addr.version == 6):
        raise argparse.ArgumentTypeError(f"invalid socket address: {text!r}")
    return f"[{addr}]:{port}" if addr.version == 6 else f"{addr}:{port}"


def _u64(text: str) -> int:
    try:
        value = int(text)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid nonce: {text!r}") from exc
    if not 0 <= value <= _U64_MAX:
        raise argparse.ArgumentTypeError(f"nonce out of range: {text!r}")
    return value


def _add_path(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-p", "--path", metavar="PATH", default=DEFAULT_PROOF_PATH,
        help="path to the file on the virtual filesystem",
    )


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser for all commands."""
    parser = argparse.ArgumentParser(prog="coproc-app")
    parser.add_argument(
        "-s", "--socket", metavar="SOCKET", type=_socket, default=DEFAULT_SOCKET,
        help="socket address of the co-processor",
    )
    commands = parser.add_subparsers(dest="cmd", required=True)

    commands.add_parser("coprocessor", help="starts the co-processor service")

    deploy = commands.add_parser("deploy", help="deploys definitions to the co-processor")
    targets = deploy.add_subparsers(dest="target", required=True)
    domain = targets.add_parser("domain", help="deploys the domain definition")
    domain.add_argument("-n", "--name", metavar="NAME", required=True,
                        help="name of the domain to be deployed")
    program = targets.add_parser("program", help="deploys the program definition")
    program.add_argument("-n", "--nonce", type=_u64, default=0,
                         help="nonce of the deployed program, used to compute its id")

    prove = commands.add_parser("prove", help="submits a proof request")
    prove.add_argument("program", metavar="PROGRAM", help="id of the deployed program")
    prove.add_argument("-j", "--json", metavar="JSON",
                       help="JSON argument passed to the program")
    _add_path(prove)

    storage = commands.add_parser("storage", help="reads a file from the storage as base64")
    storage.add_argument("program", metavar="PROGRAM", help="id of the deployed program")
    _add_path(storage)

    vk = commands.add_parser("vk", help="returns the verifying key of a program")
    vk.add_argument("program", metavar="PROGRAM", help="id of the deployed program")

    inputs = commands.add_parser("proof-inputs",
                                 help="returns the public inputs of a stored proof")
    inputs.add_argument("program", metavar="PROGRAM", help="id of the deployed program")
    _add_path(inputs)

    return parser


def _run(ns: argparse.Namespace) -> str | None:
    client = CoprocessorClient(ns.socket)
    if ns.cmd == "coprocessor":
        Builder().start_coprocessor()
        return None
    if ns.cmd == "deploy":
        builder = Builder()
        if ns.target == "domain":
            return client.deploy_domain(ns.name, builder.build_domain())
        wasm, elf = builder.build_program()
        return client.deploy_program(wasm, elf, ns.nonce)
    if ns.cmd == "prove":
        args = json.loads(ns.json) if ns.json is not None else None
        return client.prove(ns.program, args, ns.path)
    if ns.cmd == "storage":
        return client.storage(ns.program, ns.path)
    if ns.cmd == "vk":
        return client.vk(ns.program)
    return client.proof_inputs(ns.program, ns.path)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command line; return the process exit status."""
    ns = build_parser().parse_args(argv)
    try:
        output = _run(ns)
    except json.JSONDecodeError as exc:
        print(f"Error: invalid JSON argument: {exc}", file=sys.stderr)
        return 1
    except (ClientError, BuildError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    if output is not None:
        print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())