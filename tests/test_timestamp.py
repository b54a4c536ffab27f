import json
from datetime import datetime, timezone

import pytest

from redditkit.timestamp import Timestamp

EMPTY_TIME_STR = "0001-01-01T00:00:00Z"
REFERENCE_TIME_STR = "2006-01-02T15:04:05Z"
REFERENCE_UNIX = 1136214245

REFERENCE_TIME = datetime(2006, 1, 2, 15, 4, 5, tzinfo=timezone.utc)
UNIX_ORIGIN = datetime(1970, 1, 1, tzinfo=timezone.utc)


def test_marshal_reference():
    assert Timestamp(REFERENCE_TIME).to_json() == REFERENCE_TIME_STR


def test_marshal_empty_is_false():
    assert Timestamp().to_json() is False


def test_marshal_mismatch():
    assert json.dumps(Timestamp().to_json()) == "false"


@pytest.mark.parametrize(
    "data, want, equal",
    [
        (REFERENCE_TIME_STR, Timestamp(REFERENCE_TIME), True),
        (REFERENCE_UNIX, Timestamp(REFERENCE_TIME), True),
        (EMPTY_TIME_STR, Timestamp(), True),
        (0, Timestamp(UNIX_ORIGIN), True),
        (REFERENCE_TIME_STR, Timestamp(), False),
        (0, Timestamp(), False),
    ],
)
def test_unmarshal(data, want, equal):
    assert (Timestamp.from_json(data) == want) is equal


def test_unmarshal_invalid():
    with pytest.raises(ValueError):
        Timestamp.from_json("asdf")


def test_unmarshal_false_is_zero():
    ts = Timestamp.from_json(False)
    assert ts.is_zero()
    assert ts == Timestamp()


def test_unmarshal_true_is_invalid():
    with pytest.raises(ValueError):
        Timestamp.from_json(True)


def test_unmarshal_null_is_invalid():
    with pytest.raises(ValueError):
        Timestamp.from_json(None)


def test_unmarshal_float_truncates():
    assert Timestamp.from_json(REFERENCE_UNIX + 0.9) == Timestamp(REFERENCE_TIME)


def test_unmarshal_with_offset_is_same_instant():
    assert Timestamp.from_json("2006-01-02T10:04:05-05:00") == Timestamp(REFERENCE_TIME)


def test_unmarshal_from_json_text():
    assert Timestamp.from_json(json.loads(f'"{REFERENCE_TIME_STR}"')) == Timestamp(REFERENCE_TIME)


def test_zero_check():
    assert Timestamp().is_zero()
    assert not Timestamp(REFERENCE_TIME).is_zero()


@pytest.mark.parametrize("data", [Timestamp(REFERENCE_TIME), Timestamp()])
def test_marshal_reflexivity(data):
    assert Timestamp.from_json(data.to_json()) == data


def test_wrapped_marshal_reference():
    out = json.dumps({"A": 0, "Time": Timestamp(REFERENCE_TIME).to_json()}, separators=(",", ":"))
    assert out == f'{{"A":0,"Time":"{REFERENCE_TIME_STR}"}}'


def test_wrapped_marshal_mismatch():
    out = json.dumps({"A": 0, "Time": Timestamp().to_json()}, separators=(",", ":"))
    assert out == '{"A":0,"Time":false}'


@pytest.mark.parametrize("data", [Timestamp(REFERENCE_TIME), Timestamp()])
def test_wrapped_marshal_reflexivity(data):
    text = json.dumps({"A": 0, "Time": data.to_json()})
    decoded = json.loads(text)
    assert decoded["A"] == 0
    assert Timestamp.from_json(decoded["Time"]) == data