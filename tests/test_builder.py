import subprocess
from unittest import mock

import pytest

from coproc_app.builder import BuildError, Builder

RELEASE = ("target", "wasm32-unknown-unknown", "release")


def _ok(*args, **kwargs):
    return subprocess.CompletedProcess(args[0], 0)


def _write(path, data):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)


def _domain_wasm(base):
    return base.joinpath("docker", "build", "domain-wasm", *RELEASE,
                         "valence_coprocessor_app_domain_wasm.wasm")


def _program_wasm(base):
    return base.joinpath("docker", "build", "program-wasm", *RELEASE,
                         "valence_coprocessor_app_program_wasm.wasm")


def _program_elf(base):
    return base / "docker" / "build" / "program-circuit" / "target" / "program.elf"


def test_missing_base_raises(tmp_path):
    with pytest.raises(BuildError):
        Builder(tmp_path / "absent")


def test_base_is_resolved(tmp_path):
    (tmp_path / "sub").mkdir()
    assert Builder(tmp_path / "sub" / "..").base == tmp_path.resolve()


def test_run_docker_invokes_docker_in_base(tmp_path):
    builder = Builder(tmp_path)
    with mock.patch("coproc_app.builder.subprocess.run", side_effect=_ok) as run:
        builder.run_docker("ps", "-a")
    run.assert_called_once_with(["docker", "ps", "-a"], cwd=tmp_path.resolve())


def test_run_docker_failure(tmp_path):
    builder = Builder(tmp_path)
    failing = subprocess.CompletedProcess(["docker"], 1)
    with mock.patch("coproc_app.builder.subprocess.run", return_value=failing):
        with pytest.raises(BuildError):
            builder.run_docker("build")


def test_run_docker_missing_binary(tmp_path):
    builder = Builder(tmp_path)
    with mock.patch("coproc_app.builder.subprocess.run", side_effect=FileNotFoundError("docker")):
        with pytest.raises(BuildError):
            builder.run_docker("build")


def test_start_coprocessor_commands(tmp_path):
    builder = Builder(tmp_path)
    with mock.patch("coproc_app.builder.subprocess.run", side_effect=_ok) as run:
        result = builder.start_coprocessor()
    assert result is None
    commands = [c.args[0] for c in run.call_args_list]
    assert commands == [
        ["docker", "build", "-t", "coprocessor:0.1.0", "./docker/coprocessor"],
        ["docker", "run", "--rm", "-it", "--init", "-p", "37281:37281", "coprocessor:0.1.0"],
    ]


def test_start_coprocessor_stops_after_failed_build(tmp_path):
    builder = Builder(tmp_path)
    failing = subprocess.CompletedProcess(["docker"], 2)
    with mock.patch("coproc_app.builder.subprocess.run", return_value=failing) as run:
        with pytest.raises(BuildError):
            builder.start_coprocessor()
    assert run.call_count == 1


def test_build_domain_returns_wasm(tmp_path):
    builder = Builder(tmp_path)
    _write(_domain_wasm(builder.base), b"\x00asm-domain")
    with mock.patch("coproc_app.builder.subprocess.run", side_effect=_ok) as run:
        assert builder.build_domain() == b"\x00asm-domain"
    commands = [c.args[0] for c in run.call_args_list]
    assert commands[0] == ["docker", "build", "-t", "valence-coprocessor-app:0.1.0", "./docker/deploy"]
    assert commands[1][-1] == "./docker/build/domain-wasm/Cargo.toml"
    assert f"{builder.base}:/usr/src/app" in commands[1]
    assert len(commands) == 2


def test_build_domain_missing_artifact(tmp_path):
    builder = Builder(tmp_path)
    with mock.patch("coproc_app.builder.subprocess.run", side_effect=_ok):
        with pytest.raises(BuildError):
            builder.build_domain()


def test_build_program_returns_wasm_and_elf(tmp_path):
    builder = Builder(tmp_path)
    _write(_program_wasm(builder.base), b"wasm-bytes")
    _write(_program_elf(builder.base), b"elf-bytes")
    with mock.patch("coproc_app.builder.subprocess.run", side_effect=_ok) as run:
        assert builder.build_program() == (b"wasm-bytes", b"elf-bytes")
    commands = [c.args[0] for c in run.call_args_list]
    assert len(commands) == 3
    assert commands[1][-1] == "./docker/build/program-wasm/Cargo.toml"
    assert commands[2] == [
        "docker", "run", "--rm", "-it", "-v", f"{builder.base}:/usr/src/app",
        "valence-coprocessor-app:0.1.0",
    ]


def test_build_program_missing_elf(tmp_path):
    builder = Builder(tmp_path)
    _write(_program_wasm(builder.base), b"wasm-bytes")
    with mock.patch("coproc_app.builder.subprocess.run", side_effect=_ok):
        with pytest.raises(BuildError):
            builder.build_program()