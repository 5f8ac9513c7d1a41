from datetime import datetime

import pytest

from battrack.common.enums import ChargeState
from battrack.models.sample import BatteryReading, Sample
from battrack.storage.records import (
    HEADER,
    encode_record,
    parse_float,
    parse_float_or_zero,
    parse_int,
    parse_record,
)
from conftest import make_sample


def test_header_names_all_fields_in_order() -> None:
    assert HEADER == (
        "timestamp,hour,minute,percentage,model,state,cycle_count,"
        "energy_full,energy_full_design,energy,voltage"
    )


def test_encode_record_layout() -> None:
    sample = make_sample(datetime(2025, 5, 3, 9, 5, 7), percentage=55.004)
    assert encode_record(sample) == (
        "2025-5-3 9:5:7,9,5,55.00,5XJ28,discharging,212,48.10,51.00,26.45,11.90"
    )


def test_encode_record_blank_cycle_count() -> None:
    line = encode_record(make_sample(cycle_count=None))
    assert line.split(",")[6] == ""


def test_model_commas_are_replaced() -> None:
    sample = make_sample(model="Dell, Inc., 5XJ28")
    line = encode_record(sample)
    assert len(line.split(",")) == 11
    assert line.split(",")[4] == "Dell  Inc.  5XJ28"


@pytest.mark.parametrize("percentage", [0.0, 12.345, 55.5, 99.996, 100.0])
def test_percentage_survives_encoding(percentage: float) -> None:
    record = parse_record(encode_record(make_sample(percentage=percentage)))
    assert record is not None
    assert record.point.y == pytest.approx(percentage, abs=0.01)


def test_parse_record_point_and_info() -> None:
    record = parse_record("2025-5-3 9:30:0,9,30,55.00,5XJ28,charging,212,48.10,51.00,26.45,11.90\n")
    assert record is not None
    assert record.point == (9.5, 55.0)
    assert record.timestamp == datetime(2025, 5, 3, 9, 30, 0)
    assert record.info.model == "5XJ28"
    assert record.info.state is ChargeState.CHARGING
    assert record.info.cycle_count == 212
    assert record.info.energy == 26.45
    assert record.info.voltage == 11.9


def test_parse_record_short_line_is_dropped() -> None:
    assert parse_record("2025-5-3 9:30:0,9,30,55.00,5XJ28") is None
    assert parse_record("") is None


def test_parse_record_skips_repeated_header() -> None:
    assert parse_record(HEADER) is None


def test_parse_record_lenient_numbers() -> None:
    record = parse_record("garbage,x,,abc,m,Full,,n/a,,,")
    assert record is not None
    assert record.point == (0.0, 0.0)
    assert record.timestamp is None
    assert record.info.state is ChargeState.FULL
    assert record.info.cycle_count is None
    assert record.info.energy_full is None
    assert record.info.voltage is None


def test_parse_float_distinguishes_zero_from_failure() -> None:
    assert parse_float("0.0") == 0.0
    assert parse_float("oops") is None
    assert parse_float("") is None
    assert parse_float_or_zero("oops") == 0.0
    assert parse_float_or_zero(" 7.25 ") == 7.25
    assert parse_int("12") == 12
    assert parse_int("1.5") is None


@pytest.mark.parametrize(
    "text, expected",
    [
        ("Charging", ChargeState.CHARGING),
        ("discharging", ChargeState.DISCHARGING),
        ("Full", ChargeState.FULL),
        ("Not charging", ChargeState.NOT_CHARGING),
        ("NotCharging", ChargeState.NOT_CHARGING),
        ("not-charging", ChargeState.NOT_CHARGING),
        ("Unknown", ChargeState.UNKNOWN),
        ("Empty", ChargeState.UNKNOWN),
        ("", ChargeState.UNKNOWN),
    ],
)
def test_charge_state_parse(text: str, expected: ChargeState) -> None:
    assert ChargeState.parse(text) is expected


def test_charge_state_serialization_round_trip() -> None:
    for state in ChargeState:
        assert ChargeState.parse(state.value) is state


def test_overfull_reading_is_kept_unclamped() -> None:
    reading = BatteryReading(state_of_charge=1.05, state=ChargeState.CHARGING)

    sample = Sample.from_reading(reading, datetime(2025, 5, 3, 9, 30))
    record = parse_record(encode_record(sample))

    assert sample.percentage == pytest.approx(105.0)
    assert encode_record(sample).split(",")[3] == "105.00"
    assert record is not None
    assert record.point.y == pytest.approx(105.0)
