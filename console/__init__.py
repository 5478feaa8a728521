from .config import ConsoleConfig, ConsoleMode, TimeFormat
from .themes import HNDarkTheme
from .utils import apply_style, path, metric
from .hnconsole import HNConsole

__all__ = [
    "HNConsole",
    "ConsoleConfig",
    "ConsoleMode",
    "TimeFormat",
    "HNDarkTheme",
    "apply_style",
    "path",
    "metric",
]
