import pytest

import main
from telemetry.session_codec import load_session, save_session
from telemetry.shutdown import ShutdownFlag


@pytest.fixture(autouse=True)
def _no_signal_handlers(monkeypatch):
    # Keep pytest's own Ctrl+C handling
    monkeypatch.setattr(ShutdownFlag, "install", lambda self, signals=(): None)


def test_failed_load_exits_with_error(tmp_path, caplog):
    bad = tmp_path / "bad.csv"
    bad.write_text("1.0,2.0,\nnot a session\n")

    assert main.main(["-i", str(bad)]) == 1
    assert "Could not load session" in caplog.text
    assert "line 2" in caplog.text


def test_missing_input_exits_with_error(tmp_path):
    assert main.main(["-i", str(tmp_path / "missing.csv")]) == 1


def test_loaded_session_is_saved_and_plotted(tmp_path, sample_snapshot):
    src = save_session(tmp_path / "in.csv", sample_snapshot)
    out = tmp_path / "out.csv"
    png = tmp_path / "out.png"

    code = main.main(
        ["-i", str(src), "--exit-on-eof", "-o", str(out), "--plot", str(png), "--redraw-ms", "5"]
    )

    assert code == 0
    assert out.read_text() == src.read_text()
    assert png.exists()


def test_live_source_until_eof(tmp_path):
    ticks = tmp_path / "ticks.txt"
    ticks.write_text("".join(f"{0.5 * i} {i * 1.0}\n" for i in range(50)))
    out = tmp_path / "out.csv"

    code = main.main(
        ["--source", str(ticks), "--exit-on-eof", "-o", str(out), "--bins", "10", "--redraw-ms", "5"]
    )

    assert code == 0
    session = load_session(out)
    assert session.stats.count == 49
    assert session.stats.mean == pytest.approx(0.5)
    assert session.histogram.num_bins == 10
    assert session.histogram.total == 49
    assert (session.sim_time, session.real_time) == (24.5, 49.0)


def test_parser_rejects_two_inputs():
    with pytest.raises(SystemExit):
        main.build_parser().parse_args(["-i", "a.csv", "--synthetic", "1.0"])


def test_non_utf8_input_exits_with_error(tmp_path, caplog):
    bad = tmp_path / "binary.csv"
    bad.write_bytes(b"\xff\xfe\x00\x01garbage\n")

    assert main.main(["-i", str(bad)]) == 1
    assert "not valid UTF-8" in caplog.text
