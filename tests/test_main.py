import pytest

from life import HALF_BLOCKS, StatsLogger, main


def test_default_run_dies_out(capsys):
    assert main(["-q"]) == 0
    lines = capsys.readouterr().out.strip().split("\n")
    assert lines[0] == "gen 0  alive 5  communities 1"
    assert lines[-1] == "gen 4  alive 0  communities 0  [extinct]"
    assert len(lines) == 5


def test_run_prints_grid(capsys):
    assert main(["-g", "1"]) == 0
    out = capsys.readouterr().out
    assert HALF_BLOCKS[3] in out or HALF_BLOCKS[2] in out or HALF_BLOCKS[1] in out
    assert "gen 1  alive 4  communities 1" in out


def test_stop_on_cycle(capsys):
    argv = ["--pattern", "block", "--rows", "4", "--cols", "4",
            "-g", "10", "--stop-on-cycle", "-q"]
    assert main(argv) == 0
    lines = capsys.readouterr().out.strip().split("\n")
    assert lines[-1] == "gen 1  alive 4  communities 1  [cycle=1]"


def test_cycle_reported_without_stopping(capsys):
    argv = ["--pattern", "blinker", "--rows", "5", "--cols", "5", "--at", "2", "1",
            "-g", "3", "-q"]
    assert main(argv) == 0
    lines = capsys.readouterr().out.strip().split("\n")
    assert lines[-2] == "gen 2  alive 3  communities 1  [cycle=2]"
    assert lines[-1] == "gen 3  alive 3  communities 1  [cycle=2]"


def test_file_run_with_log(tmp_path, blinker_file):
    log = tmp_path / "stats.csv"
    assert main([str(blinker_file), "-q", "-g", "2", "--log", str(log)]) == 0

    rows = log.read_text().strip().split("\n")
    assert rows[0] == StatsLogger.HEADER.strip()
    assert len(rows) == 4
    gen, _, alive, communities, event = rows[-1].split(",")
    assert (gen, alive, communities, event) == ("2", "3", "1", "cycle=2")


def test_bad_file_reports_error(tmp_path, capsys):
    board = tmp_path / "board.txt"
    board.write_text("2 2 true false")
    assert main([str(board)]) == 1
    assert capsys.readouterr().err.startswith("life: ")


def test_missing_file_reports_error(tmp_path, capsys):
    assert main([str(tmp_path / "missing.txt")]) == 1
    assert "life: " in capsys.readouterr().err


def test_bad_pattern_dimensions_report_error(capsys):
    assert main(["--pattern", "glider", "--rows", "0"]) == 1
    assert "rows must be positive" in capsys.readouterr().err


def test_file_and_pattern_are_exclusive(tmp_path):
    with pytest.raises(SystemExit) as exc:
        main([str(tmp_path / "x.txt"), "--pattern", "glider"])
    assert exc.value.code == 2


def test_stats_logger_unwritable_path_is_silent(tmp_path):
    logger = StatsLogger(tmp_path / "missing-dir" / "stats.csv")
    logger.open()
    logger.log(1, 2, 3, "extinct")
    logger.close()
    assert not (tmp_path / "missing-dir").exists()
