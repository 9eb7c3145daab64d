from datetime import datetime, timezone

from minestake.history import TIMESTAMP_FORMAT, GameHistory, format_entry


def test_format_entry():
    ts = datetime(2026, 10, 18, 12, 0, 0)
    entry = format_entry(True, 100, 125, 1025, timestamp=ts)
    assert entry == (
        f"{ts.strftime(TIMESTAMP_FORMAT)} | WIN | Bet: Rs.100.00 | "
        "Winnings: Rs.125.00 | Balance: Rs.1025.00"
    )
    assert " | LOSS | " in format_entry(False, 5, 0, 995, timestamp=ts)


def test_timestamp_carries_zone_name():
    ts = datetime(2026, 10, 18, 12, 0, 0, tzinfo=timezone.utc)
    entry = format_entry(True, 1, 1.25, 1000.25, timestamp=ts)
    assert entry.startswith("Sun Oct 18 12:00:00 UTC 2026 | WIN | ")

    stamp = format_entry(False, 1, 0, 999, timestamp=None).split(" | ")[0]
    assert datetime.now().astimezone().strftime("%Z") in stamp


def test_append_and_read_last_five(tmp_path):
    history = GameHistory(tmp_path / "log.txt")
    for i in range(7):
        assert history.append(i % 2 == 0, 10.0 + i, 0.0, 1000.0 - i)

    lines = history.last()
    assert len(lines) == 5
    assert "Bet: Rs.12.00" in lines[0]
    assert "Bet: Rs.16.00" in lines[-1]
    assert history.last(2) == lines[-2:]


def test_missing_file_is_empty_history(tmp_path, capsys):
    history = GameHistory(tmp_path / "nope.txt")
    assert history.last() == []
    history.display_last()
    assert "No game history found." in capsys.readouterr().out


def test_display_last_numbers_from_one(tmp_path, capsys):
    history = GameHistory(tmp_path / "log.txt")
    history.append(True, 1, 1.25, 1000.25)
    history.append(False, 2, 0, 998.25)
    history.display_last(5)
    out = capsys.readouterr().out.splitlines()
    assert out[0].startswith("1. ")
    assert out[1].startswith("2. ")
    assert "LOSS" in out[1]


def test_write_failure_is_reported_not_raised(tmp_path, capsys):
    # A directory cannot be opened for appending.
    history = GameHistory(tmp_path)
    assert history.append(True, 1, 1, 1) is False
    assert "Error writing to log file" in capsys.readouterr().out
