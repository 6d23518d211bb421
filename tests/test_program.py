import json

import pytest

from coproc_app.circuit import circuit
from coproc_app.program import ProgramError, entrypoint, get_witnesses


@pytest.mark.parametrize("value", [0, 5, 2**64 - 1])
def test_get_witnesses_round_trip(value):
    witnesses = get_witnesses({"value": value})
    assert len(witnesses) == 1
    assert int.from_bytes(witnesses[0].as_data(), "little") == value
    assert len(witnesses[0].as_data()) == 8


def test_get_witnesses_feeds_circuit():
    out = circuit(get_witnesses({"value": 10}))
    assert int.from_bytes(out, "little") == 11


@pytest.mark.parametrize(
    "args",
    [{}, {"value": -1}, {"value": 2**64}, {"value": 1.5}, {"value": True}, {"value": "3"}, None, [1]],
)
def test_get_witnesses_invalid(args):
    with pytest.raises(ProgramError):
        get_witnesses(args)


def test_entrypoint_store_writes_json():
    storage = {}
    args = {"args": {"value": 3}, "payload": {"cmd": "store", "path": "/var/share/proof.bin"}}
    result = entrypoint(args, storage)
    assert result == args
    assert list(storage) == ["/var/share/proof.bin"]
    assert json.loads(storage["/var/share/proof.bin"]) == args


def test_entrypoint_serialization_is_compact_and_sorted():
    storage = {}
    entrypoint({"payload": {"path": "/p", "cmd": "store"}}, storage)
    assert storage["/p"] == b'{"payload":{"cmd":"store","path":"/p"}}'


def test_entrypoint_unknown_command():
    storage = {}
    with pytest.raises(ProgramError):
        entrypoint({"payload": {"cmd": "erase", "path": "/p"}}, storage)
    assert storage == {}


@pytest.mark.parametrize(
    "args",
    [{}, {"payload": {}}, {"payload": {"cmd": 1}}, {"payload": {"cmd": "store"}}, {"payload": {"cmd": "store", "path": 4}}],
)
def test_entrypoint_invalid_payload(args):
    with pytest.raises(ProgramError):
        entrypoint(args, {})