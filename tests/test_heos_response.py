#!/usr/bin/env python3
"""Tests for the HEOS response envelope and player model"""

import copy

import pytest

from denounce import (
    HeosDecodeError,
    HeosPlayer,
    HeosProtocolError,
    HeosResponse,
    HeosResult,
)

from conftest import GET_PLAYERS_SUCCESS


def test_decode_get_players_success():
    """A success envelope decodes its player list"""
    response = HeosResponse.from_jsonable(GET_PLAYERS_SUCCESS, HeosPlayer.list_from_jsonable)
    response.raise_for_result()
    assert response.result == HeosResult.SUCCESS
    assert response.command == "player/get_players"
    assert len(response.payload) == 1
    player = response.payload[0]
    assert player.pid == 1
    assert player.name == "Living Room"
    assert player.lineout == 1
    assert player.serial == "S1"


@pytest.mark.parametrize("payload", [[], {"unexpected": True}, "nonsense", None])
def test_decode_fail_ignores_payload_shape(payload):
    """A fail envelope raises HeosProtocolError whatever the payload looks like"""
    data = copy.deepcopy(GET_PLAYERS_SUCCESS)
    data["heos"]["result"] = "fail"
    data["heos"]["message"] = "eid=2&text=ID Not Valid"
    data["payload"] = payload

    def _decoder(_raw):
        raise AssertionError("payload decoded for a failed response")

    response = HeosResponse.from_jsonable(data, _decoder)
    assert response.result == HeosResult.FAIL
    assert response.payload is None
    with pytest.raises(HeosProtocolError) as excinfo:
        response.raise_for_result()
    assert excinfo.value.header.command == "player/get_players"
    assert "ID Not Valid" in str(excinfo.value)
    assert "eid=2" in str(excinfo.value)


@pytest.mark.parametrize("wire", ["success", "SUCCESS", "Success"])
def test_result_is_case_insensitive(wire):
    """result strings decode regardless of case"""
    assert HeosResult.from_wire(wire) == HeosResult.SUCCESS


@pytest.mark.parametrize("wire", ["ok", "", None, 1])
def test_result_invalid(wire):
    """anything other than success/fail is a decode error"""
    with pytest.raises(HeosDecodeError):
        HeosResult.from_wire(wire)


def test_missing_message_and_payload():
    """message defaults to empty and a unit response has no payload"""
    response = HeosResponse.from_jsonable(
        {"heos": {"command": "browse/play_stream", "result": "success"}}
    )
    response.raise_for_result()
    assert response.message == ""
    assert response.payload is None


@pytest.mark.parametrize(
    "data",
    [
        [],
        {"payload": []},
        {"heos": "player/get_players"},
        {"heos": {"result": "success"}},
        {"heos": {"command": "x", "result": "success", "message": 3}},
    ],
)
def test_malformed_envelope(data):
    """shape mismatches are decode errors"""
    with pytest.raises(HeosDecodeError):
        HeosResponse.from_jsonable(data)


def test_message_fields():
    """the message splits into query-string fields"""
    response = HeosResponse.from_jsonable(
        {
            "heos": {
                "command": "browse/play_stream",
                "result": "fail",
                "message": "eid=9&text=Processing previous command&bare",
            }
        }
    )
    assert response.header.message_fields() == {
        "eid": "9",
        "text": "Processing previous command",
        "bare": "",
    }
    assert response.header.error_id == "9"
    assert response.header.error_text == "Processing previous command"


def test_player_ignores_extra_keys():
    """keys beyond the modeled ones are ignored"""
    record = dict(GET_PLAYERS_SUCCESS["payload"][0], gid=5, ip="10.0.0.2")
    player = HeosPlayer.from_jsonable(record)
    assert player.to_jsonable() == GET_PLAYERS_SUCCESS["payload"][0]


@pytest.mark.parametrize(
    "field,value",
    [
        ("pid", "1"),
        ("pid", True),
        ("pid", 2**63),
        ("lineout", 256),
        ("lineout", -1),
        ("name", None),
        ("serial", 5),
    ],
)
def test_player_field_validation(field, value):
    """player fields must have the documented types"""
    record = dict(GET_PLAYERS_SUCCESS["payload"][0])
    record[field] = value
    with pytest.raises(HeosDecodeError):
        HeosPlayer.from_jsonable(record)


def test_player_missing_field():
    """every modeled field is required"""
    record = dict(GET_PLAYERS_SUCCESS["payload"][0])
    del record["serial"]
    with pytest.raises(HeosDecodeError):
        HeosPlayer.from_jsonable(record)


def test_player_list_must_be_list():
    """get_players payload must be an array"""
    with pytest.raises(HeosDecodeError):
        HeosPlayer.list_from_jsonable({"pid": 1})
