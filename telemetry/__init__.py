"""
RTF sample pipeline: clock ticks in, live statistics, histogram and recent
samples out, plus the session file codec.
"""
from telemetry.errors import ConfigurationError, ParseError, RtfMonitorError
from telemetry.model import ClockTick, HistogramState, SessionSnapshot, SessionView, StatsState
from telemetry.session_codec import decode, encode, load_session, save_session
from telemetry.session_state import RtfSessionState

__all__ = [
    'ClockTick',
    'ConfigurationError',
    'HistogramState',
    'ParseError',
    'RtfMonitorError',
    'RtfSessionState',
    'SessionSnapshot',
    'SessionView',
    'StatsState',
    'decode',
    'encode',
    'load_session',
    'save_session',
]
