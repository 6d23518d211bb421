# coproc-app

A command-line tool and small library for working with a co-processor
service. It builds the domain and program artifacts in Docker, registers
them with the service, asks the service for proofs, and reads back the
stored results.

## Installation

```
pip install .
```

## Command line

Every command talks to the service at `127.0.0.1:37281` unless you pass
`--socket HOST:PORT` (`-s`) before the subcommand. The host must be an IP
address; an IPv6 address is written in brackets, as in `[::1]:37281`.

```
coproc-app coprocessor                       # build and start the service container
coproc-app deploy domain --name my-domain    # build and register the domain, prints its id
coproc-app deploy program --nonce 0          # build and register the program, prints its id
coproc-app prove PROGRAM --json '{"value": 41}'
coproc-app storage PROGRAM --path /var/share/proof.bin
coproc-app vk PROGRAM
coproc-app proof-inputs PROGRAM --path /var/share/proof.bin
```

- `coprocessor` builds the `coprocessor:0.1.0` image from
  `./docker/coprocessor` and runs it with port 37281 published.
- `deploy domain` builds the `valence-coprocessor-app:0.1.0` image from
  `./docker/deploy`, compiles the domain WASM library inside it, and
  registers the library under `--name`.
- `deploy program` builds the same image, compiles the program WASM
  library and the circuit ELF, and registers both with `--nonce`
  (default 0, an unsigned 64-bit integer).
- `prove` sends the `--json` argument (or `null` when omitted) and asks
  the service to store the proof at `--path`; it prints the raw response.
- `storage` prints the file at `--path` on the program's virtual
  filesystem as base64.
- `vk` prints the program's verifying key as base64.
- `proof-inputs` reads the stored document at `--path`, decodes its
  `proof` field and prints the proof's public inputs.

`--path` defaults to `/var/share/proof.bin`. On failure the command prints
`Error: ...` to standard error and exits with status 1.

The `coprocessor` and `deploy` commands need `docker` on the `PATH` and
must be run from the project directory: they use the current directory
as the root for `docker/coprocessor`, `docker/deploy` and `docker/build`.

## Library

```python
from coproc_app.client import CoprocessorClient

client = CoprocessorClient("127.0.0.1:37281")
key = client.vk("PROGRAM")
```

- `coproc_app.client.CoprocessorClient` has `deploy_domain`,
  `deploy_program`, `prove`, `storage`, `vk` and `proof_inputs`. It
  accepts an optional `requests.Session` and raises `ClientError` when a
  request fails or the answer is not what was expected.
- `coproc_app.builder.Builder(base)` runs the Docker steps from the
  directory `base` (the current directory by default) with
  `start_coprocessor`, `build_domain` (returns the WASM bytes) and
  `build_program` (returns `(wasm, elf)`). It raises `BuildError` when a
  Docker command fails or an artifact cannot be read.
- `coproc_app.program.get_witnesses(args)` turns `args["value"]`, an
  unsigned 64-bit integer, into one data `Witness` holding its eight
  little-endian bytes. `entrypoint(args, storage)` handles the `store`
  command by writing the JSON-encoded request into the `storage` mapping
  under `payload.path`, and returns `args`. Bad arguments raise
  `ProgramError`.
- `coproc_app.circuit.circuit(witnesses)` reads the 64-bit value in the
  first witness, adds one with wrap-around on overflow and returns it as
  eight little-endian bytes.

## What it does not do

- It has no domain logic: nothing here validates blocks or produces state
  proofs. `deploy domain` only builds and registers whatever domain
  library the project's Docker setup compiles.
- It does not ship the Docker files or the crates they build; the
  `docker/` directory must already exist in the project directory.
- It is a client only; the co-processor service itself runs in the
  container that `coprocessor` starts.

## Tests

```
pip install .[test]
pytest
```