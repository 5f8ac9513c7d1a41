from datetime import datetime
from pathlib import Path

from battrack.common.enums import ChargeState
from battrack.display.chart import build_chart
from battrack.storage.history import HistoryLoader, load_history, load_records
from battrack.storage.recorder import Recorder
from battrack.system.buffer import SharedBuffer
from conftest import make_sample, write_log


def test_load_yields_one_point_per_sample(log_path: Path) -> None:
    recorder = Recorder(log_path)
    for minute in range(5):
        recorder.append(make_sample(datetime(2025, 5, 3, 10, minute * 10), 80.0 - minute))

    points, info = load_history(log_path)

    assert len(points) == 5
    assert points[0] == (10.0, 80.0)
    assert points[-1].y == 76.0
    assert info is not None


def test_load_drops_short_lines(log_path: Path) -> None:
    write_log(
        log_path,
        "2025-5-3 8:0:0,8,0,50.00,m,discharging,1,1.00,1.00,1.00,1.00",
        "2025-5-3 8:30:0,8,30,49.00",
        "",
        "2025-5-3 9:0:0,9,0,48.00,m,discharging,1,1.00,1.00,1.00,1.00",
        "2025-5-3 9:1",
    )

    points, _ = load_history(log_path)

    assert points == [(8.0, 50.0), (9.0, 48.0)]


def test_load_is_idempotent(log_path: Path) -> None:
    recorder = Recorder(log_path)
    recorder.append(make_sample())
    recorder.append(make_sample(datetime(2025, 5, 3, 11, 0), 60.0))

    assert load_history(log_path) == load_history(log_path)


def test_device_info_reflects_last_valid_line(log_path: Path) -> None:
    write_log(
        log_path,
        "2025-5-3 8:0:0,8,0,50.00,OLD,charging,10,40.00,50.00,20.00,12.00",
        "2025-5-3 9:0:0,9,0,55.00,NEW,full,11,41.00,50.00,41.00,12.60",
        "2025-5-3 9:5:0,9,5,56.00",
    )

    _, info = load_history(log_path)

    assert info is not None
    assert info.model == "NEW"
    assert info.state is ChargeState.FULL
    assert info.cycle_count == 11
    assert info.energy_full == 41.0
    assert info.energy == 41.0
    assert info.voltage == 12.6
    assert info.timestamp == datetime(2025, 5, 3, 9, 0, 0)


def test_end_to_end_points_and_area(log_path: Path) -> None:
    write_log(
        log_path,
        "2025-5-3 8:0:0,8,0,50.00,m,discharging,1,1.00,1.00,1.00,1.00",
        "2025-5-3 9:30:0,9,30,55.00,m,charging,1,1.00,1.00,1.00,1.00",
    )

    points, _ = load_history(log_path)
    geometry = build_chart(points)

    assert points == [(8.0, 50.0), (9.5, 55.0)]
    assert list(geometry.area) == [(8.0, 0.0), (8.0, 50.0), (9.5, 55.0), (9.5, 0.0)]


def test_missing_log_is_empty(tmp_path: Path) -> None:
    assert load_history(tmp_path / "absent.csv") == ([], None)


def test_header_only_log(log_path: Path) -> None:
    write_log(log_path)
    assert load_history(log_path) == ([], None)


def test_since_filters_old_records(log_path: Path) -> None:
    write_log(
        log_path,
        "2025-5-2 8:0:0,8,0,90.00,m,discharging,1,1.00,1.00,1.00,1.00",
        "2025-5-3 8:0:0,8,0,50.00,m,discharging,1,1.00,1.00,1.00,1.00",
    )

    points, _ = load_history(log_path, since=datetime(2025, 5, 3, 0, 0))

    assert points == [(8.0, 50.0)]


def test_loader_refresh_replaces_buffer(log_path: Path) -> None:
    buffer = SharedBuffer()
    loader = HistoryLoader(log_path, buffer)

    assert loader.refresh() is False
    assert buffer.snapshot().points == ()

    Recorder(log_path).append(make_sample())
    assert loader.refresh() is True
    assert buffer.snapshot().points == ((9.5, 55.0),)

    Recorder(log_path).append(make_sample(datetime(2025, 5, 3, 10, 0), 54.0))
    loader.refresh()
    assert buffer.snapshot().points == ((9.5, 55.0), (10.0, 54.0))


def test_loader_history_window(log_path: Path) -> None:
    write_log(
        log_path,
        "2025-5-3 1:0:0,1,0,90.00,m,discharging,1,1.00,1.00,1.00,1.00",
        "2025-5-3 11:0:0,11,0,50.00,m,discharging,1,1.00,1.00,1.00,1.00",
    )
    buffer = SharedBuffer()
    loader = HistoryLoader(
        log_path, buffer, history_hours=2, clock=lambda: datetime(2025, 5, 3, 12, 0)
    )

    loader.refresh()

    assert buffer.snapshot().points == ((11.0, 50.0),)


def test_load_records_keeps_timestamps(log_path: Path) -> None:
    write_log(
        log_path,
        "2025-5-3 8:0:0,8,0,50.00,m,discharging,1,1.00,1.00,1.00,1.00",
        "not-a-date,9,0,48.00,m,discharging,1,1.00,1.00,1.00,1.00",
    )

    records = load_records(log_path)

    assert [r.timestamp for r in records] == [datetime(2025, 5, 3, 8, 0, 0), None]
    assert [r.point for r in records] == [(8.0, 50.0), (9.0, 48.0)]


def test_loader_clears_buffer_when_log_disappears(log_path: Path) -> None:
    buffer = SharedBuffer()
    loader = HistoryLoader(log_path, buffer)
    Recorder(log_path).append(make_sample())
    loader.refresh()
    assert buffer.snapshot().points

    log_path.unlink()

    assert loader.refresh() is False
    assert buffer.snapshot().points == ()
    assert buffer.snapshot().info is None
