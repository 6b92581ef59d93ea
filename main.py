#!/usr/bin/env python3
"""
RTF Monitor - Main Entry Point

Watches a simulation clock and tracks its real time factor: running
statistics, a histogram and the most recent samples. Sessions can be saved
on exit and loaded again later for inspection.

Usage:
    python main.py --source ticks.txt              # Ingest "sim real" lines from a file
    some_clock_echo | python main.py --source -    # ... or from stdin
    python main.py --synthetic 0.8                 # Synthetic clock running at RTF 0.8
    python main.py --synthetic 1.0 -o run.csv      # Save the session on Ctrl+C
    python main.py -i run.csv --plot run.png       # Inspect a saved session
"""
import argparse
import logging
import sys

from dotenv import load_dotenv
from PyQt5 import QtCore

from telemetry.clock_source import SyntheticClock, read_clock_ticks
from telemetry.clock_worker import ClockTelemetryWorker
from telemetry.config import MonitorConfig
from telemetry.errors import RtfMonitorError
from telemetry.sample_loop import SampleLoop
from telemetry.session_codec import load_session
from telemetry.session_state import RtfSessionState
from telemetry.shutdown import ShutdownFlag
from ui.console_view import ConsoleView
from ui.rtf_figure import save_rtf_figure

logger = logging.getLogger("rtf_monitor")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rtf-monitor",
        description="Real time factor monitor for simulation clocks",
    )

    inputs = parser.add_mutually_exclusive_group()
    inputs.add_argument("-i", "--input", help="Load a saved session instead of ingesting ticks")
    inputs.add_argument("--source", help="Tick stream, one 'sim real' pair per line ('-' for stdin)")
    inputs.add_argument("--synthetic", type=float, metavar="RTF", help="Run a synthetic clock at this RTF")

    parser.add_argument("-o", "--output", help="Save the session to this file on exit (overwrites)")
    parser.add_argument("--plot", help="Write a figure of the session to this image file on exit")
    parser.add_argument("--bins", type=int, help="Number of histogram bins")
    parser.add_argument("--range", type=float, nargs=2, metavar=("MIN", "MAX"), help="Histogram range")
    parser.add_argument("--capacity", type=int, help="Number of recent samples kept")
    parser.add_argument("--redraw-ms", type=int, help="Render loop period in milliseconds")
    parser.add_argument(
        "--exit-on-eof",
        action="store_true",
        help="Stop when the tick source runs out (right away for a loaded session)",
    )
    parser.add_argument("--log-level", help="Logging level (DEBUG, INFO, ...)")
    return parser


def make_source_factory(args):
    """Return a TickSourceFactory for the selected input, or None."""
    if args.synthetic is not None:
        clock = SyntheticClock(target_rtf=args.synthetic)
        return lambda should_continue: clock.ticks(should_continue=should_continue)

    if args.source == "-":
        return lambda should_continue: read_clock_ticks(sys.stdin, should_continue)

    if args.source:
        def from_file(should_continue):
            with open(args.source, "r") as fh:
                yield from read_clock_ticks(fh, should_continue)
        return from_file

    return None


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    config = MonitorConfig.from_env()
    hist_min, hist_max = args.range if args.range else (None, None)
    config = config.with_overrides(
        hist_bins=args.bins,
        hist_min=hist_min,
        hist_max=hist_max,
        recent_capacity=args.capacity,
        redraw_ms=args.redraw_ms,
        log_level=args.log_level.upper() if args.log_level else None,
    )
    logging.getLogger().setLevel(config.log_level)

    print("=" * 60)
    print("⏱️  RTF MONITOR STARTING...")
    print("=" * 60)

    state = RtfSessionState(
        hist_bins=config.hist_bins,
        hist_min=config.hist_min,
        hist_max=config.hist_max,
        recent_capacity=config.recent_capacity,
    )

    if args.input:
        try:
            snapshot = load_session(args.input)
        except (OSError, RtfMonitorError) as e:
            logger.error(f"Could not load session '{args.input}': {e}")
            return 1
        state.load(snapshot)

    app = QtCore.QCoreApplication.instance() or QtCore.QCoreApplication(sys.argv[:1])

    shutdown = ShutdownFlag()
    shutdown.install()
    if state.loaded and args.exit_on_eof:
        shutdown.set()

    worker = None
    source_factory = make_source_factory(args)
    if source_factory is not None and not state.loaded:
        worker = ClockTelemetryWorker(state, source_factory)
    elif not state.loaded:
        logger.warning("No tick source selected (use --source or --synthetic); waiting for Ctrl+C")

    view = ConsoleView(interval=config.summary_interval)
    loop = SampleLoop(
        state,
        shutdown,
        renderer=view.render,
        worker=worker,
        redraw_ms=config.redraw_ms,
        exit_on_source_end=args.exit_on_eof,
    )

    print("✅ Monitor ready - press Ctrl+C to stop")
    loop.run(app)

    print("\n🛑 Shutting down...")
    final_view = state.view()
    view.render(final_view, force=True)

    if args.output:
        loop.save(args.output)
    if args.plot:
        save_rtf_figure(final_view, args.plot, rtf_min=config.plot_min, rtf_max=config.plot_max)

    print("👋 Goodbye!")
    return 0


def cli():
    # Configure logging before anything else logs
    logging.basicConfig(
        level=logging.INFO,
        format='[%(levelname)s] %(name)s: %(message)s',
        stream=sys.stdout
    )

    # Load environment variables from .env file
    load_dotenv()

    try:
        sys.exit(main())
    except RtfMonitorError as e:
        logger.error(f"{type(e).__name__}: {e}")
        sys.exit(2)


if __name__ == "__main__":
    cli()
