from telemetry.clock_worker import ClockTelemetryWorker
from telemetry.model import ClockTick
from telemetry.sample_loop import SampleLoop
from telemetry.session_codec import load_session
from telemetry.session_state import RtfSessionState
from telemetry.shutdown import ShutdownFlag


def test_iterate_renders_until_shutdown():
    state = RtfSessionState()
    state.add_ticks([ClockTick(0, 0), ClockTick(2, 1)])
    shutdown = ShutdownFlag()
    views = []
    loop = SampleLoop(state, shutdown, renderer=views.append)

    assert loop.iterate()
    assert loop.iterate()
    shutdown.set()
    assert not loop.iterate()

    assert loop.iterations == 2
    assert len(views) == 2
    assert views[-1].snapshot.stats.mean == 2.0


def test_source_exhaustion_requests_shutdown_when_enabled():
    state = RtfSessionState()

    def factory(should_continue):
        yield ClockTick(0, 0)
        yield ClockTick(1, 1)

    worker = ClockTelemetryWorker(state, factory)
    shutdown = ShutdownFlag()
    loop = SampleLoop(state, shutdown, renderer=lambda view: None, worker=worker, exit_on_source_end=True)

    worker.run()
    assert shutdown.is_set()
    assert loop.worker is worker


def test_source_exhaustion_ignored_by_default():
    state = RtfSessionState()
    worker = ClockTelemetryWorker(state, lambda should_continue: iter([]))
    shutdown = ShutdownFlag()
    loop = SampleLoop(state, shutdown, renderer=lambda view: None, worker=worker)

    worker.run()
    assert not shutdown.is_set()
    assert loop.iterations == 0


def test_save_writes_final_state(tmp_path):
    state = RtfSessionState(hist_bins=4)
    state.add_ticks([ClockTick(0, 0), ClockTick(1, 1), ClockTick(3, 2)])
    loop = SampleLoop(state, ShutdownFlag(), renderer=lambda view: None)

    path = loop.save(tmp_path / "session.csv")

    loaded = load_session(path)
    assert loaded == state.snapshot()
    assert loaded.stats.count == 2
    assert (loaded.sim_time, loaded.real_time) == (3.0, 2.0)
