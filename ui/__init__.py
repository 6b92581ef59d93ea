"""
Presentation of RTF session views: console summary and figure export.
"""
from ui.console_view import ConsoleView, format_summary
from ui.rtf_figure import build_rtf_figure, save_rtf_figure

__all__ = ['ConsoleView', 'format_summary', 'build_rtf_figure', 'save_rtf_figure']
