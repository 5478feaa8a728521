import datetime
import time
from typing import Any
from zoneinfo import ZoneInfo

from rich.console import Console, RenderableType
from rich.progress import Progress, SpinnerColumn, TextColumn, BarColumn, TaskProgressColumn, TimeElapsedColumn
from rich.style import Style
from rich.table import Column

from .config import ConsoleConfig, ConsoleMode
from .themes import HNDarkTheme
from .utils import apply_style


_MESSAGE_ICONS = {
    "notification": "ⓘ",
    "complete": "✔",
    "warning": "⚠",
    "error": "ⓧ",
}


class HNConsole:
    """
    Singleton console used for all library output.

    Every module obtains the console with ``HNConsole()``; the first call (or
    any call with a different config) decides the output mode:

    - NORMAL: styled output to the terminal.
    - LOGGING: plain output appended to ``ConsoleConfig.log_file``.
    - NULL: nothing is printed and no progress bars are created.
    - SILENT: progress bars only; text messages are suppressed.

    :ivar _instance: Singleton instance of the `HNConsole` class.
    :vartype _instance: HNConsole
    """

    _instance = None
    _console: Console|None = None
    _cfg: ConsoleConfig|None = None
    _log_file_handle: Any|None = None
    _mode: ConsoleMode|None = None
    _progress_bar: Progress|None = None
    _progress_tasks = {}
    _tz_info: ZoneInfo|None = None

    def __new__(cls, cfg: ConsoleConfig|None = None):
        """
        Return the shared console, re-initializing it when a different config
        is supplied.

        :param cfg: Optional configuration object. If None is provided on the
            first call, default parameters are used.
        :returns: The singleton instance with its configuration applied.
        """
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialize(cfg)
        elif cfg is not None and cls._instance._cfg != cfg:
            cls._instance.print_warning("HNConsole already initialized with a different config. Re-initializing with new config.")
            cls._instance._initialize(cfg)
        return cls._instance

    def _initialize(self, cfg: ConsoleConfig|None = None):
        """
        Set up the rich console for the configured mode.

        :param cfg: Console settings. Defaults to ``ConsoleConfig()``.
        :raises ValueError: When using LOGGING mode without a ``log_file``.
        :raises RuntimeError: When the log file cannot be opened.
        """
        # Close existing log file if re-initializing
        if self._log_file_handle:
            self._log_file_handle.close()
            self._log_file_handle = None
        if self._progress_bar is not None:
            self.progress_stop()

        self._cfg = cfg if cfg is not None else ConsoleConfig()
        self._mode = self._cfg.mode
        self._tz_info = ZoneInfo(self._cfg.timezone) if self._cfg.timezone else None
        theme = HNDarkTheme()

        if self._mode == ConsoleMode.NULL:
            self._console = Console(quiet=True)
            return

        elif self._mode == ConsoleMode.LOGGING:
            if not self._cfg.log_file:
                raise ValueError("log_file must be specified in ConsoleConfig for logging mode")
            try:
                self._log_file_handle = open(self._cfg.log_file, "a+", encoding="utf-8")
            except IOError as e:
                raise RuntimeError(f"Failed to open log file {self._cfg.log_file}: {e}") from e
            self._console = Console(
                file=self._log_file_handle,
                theme=theme,
                force_terminal=False,
                no_color=True,
            )

        elif self._mode in (ConsoleMode.NORMAL, ConsoleMode.SILENT):
            self._console = Console(
                theme=theme,
                force_jupyter=False,
                no_color=not self._cfg.use_colors,
                highlight=False,
            )

        else:
            raise ValueError(f"Unsupported console mode: {self._mode}")

    def _should_do_terminal(self):
        return self._mode in (ConsoleMode.NORMAL, ConsoleMode.SILENT)

    def _should_do_print(self):
        """NULL prints nothing and SILENT only shows progress bars."""
        return self._mode not in (ConsoleMode.NULL, ConsoleMode.SILENT)

    def progress_start(self):
        if not self._should_do_terminal():
            return
        self._create_progress_bar()
        self._progress_bar.start()

    def progress_stop(self):
        if self._progress_bar is None:
            return
        self._progress_bar.stop()
        self._progress_bar = None
        self._progress_tasks = {}

    def print(self, content: str|RenderableType = "", style: str|Style = ""):
        """
        Print text or a rich renderable (Table, Panel, ...).

        Text gets the timestamp prefix when ``show_time`` is enabled;
        renderables are printed as-is.
        """
        if not self._should_do_print():
            return
        if hasattr(content, '__rich_console__') or hasattr(content, '__rich__'):
            self._console.print(content)
            return
        if style:
            content = apply_style(content, style) if isinstance(style, str) else content
        self._print_message(content)

    def print_notification(self, content: str):
        self._print_message(self._format_message("notification", content))

    def print_warning(self, content: str):
        self._print_message(self._format_message("warning", content))

    def print_error(self, content: str):
        self._print_message(self._format_message("error", content))

    def print_complete(self, content: str):
        self._print_message(self._format_message("complete", content))

    def print_success(self, content: str):
        self._print_message(apply_style(content, "success"))

    def rule(self, content, style: str|Style = ""):
        if not self._should_do_print():
            return
        self._console.rule(f"{apply_style(content, 'rule.text')}", style=style or "rule.line")

    def create_progress_task(self, task_name: str, task_desc: str, total: float|None = None, **kwargs):
        """
        Create a named task in the progress bar, starting the bar if needed.

        :param task_name: The unique name used to identify the progress task.
        :param task_desc: Description shown next to the bar.
        :param total: Total number of steps. If None, the task is indeterminate.
        """
        if self._should_do_terminal():
            if self._progress_bar is None:
                self.progress_start()
            task_id = self._progress_bar.add_task(task_desc, total=total, **kwargs)
            self._progress_tasks[task_name] = {"id": task_id, "total": total, "description": task_desc, "completed": 0}

    def update_progress_task(self, task_name: str, completed: float|None = None, **kwargs):
        """
        Update a progress task by absolute ``completed`` value or by ``advance``.

        :returns: True if the task was updated, False if it does not exist.
        """
        if not self._should_do_terminal():
            return False
        task_config = self._progress_tasks.get(task_name)
        if task_config is None:
            return False
        if completed is None:
            completed = task_config["completed"] + kwargs.pop("advance", 0)
        task_config["completed"] = completed
        self._progress_bar.update(task_config["id"], completed=completed, **kwargs)
        return True

    def remove_progress_task(self, task_name: str):
        """
        Remove a progress task; the bar is stopped once no tasks remain.

        :returns: True if the task was removed.
        """
        if not self._should_do_terminal() or task_name not in self._progress_tasks:
            return False
        task_config = self._progress_tasks.pop(task_name)
        self._progress_bar.remove_task(task_config["id"])
        if not self._progress_tasks:
            self.progress_stop()
        return True

    def has_progress_task(self, task_name: str):
        return task_name in self._progress_tasks

    def get_console_config(self) -> ConsoleConfig:
        return self._cfg

    def _format_message(self, message_type: str, content: str) -> str:
        icon = _MESSAGE_ICONS[message_type]
        return f"[{message_type}.icon]{icon}[/{message_type}.icon] {apply_style(content, f'{message_type}.content')}"

    def _time_prefix(self) -> str:
        moment = datetime.datetime.fromtimestamp(time.time(), tz=datetime.timezone.utc)
        if self._tz_info is not None:
            moment = moment.astimezone(self._tz_info)
        stamp = moment.strftime(self._cfg.time_format.value)
        return f"[time.brackets]\\[[/time.brackets][time.numbers]{stamp}[/time.numbers][time.brackets]][/time.brackets] "

    def _print_message(self, text: str):
        if not self._should_do_print():
            return
        if self._cfg.show_time:
            text = self._time_prefix() + text
        self._console.print(text)

    def _create_progress_bar(self):
        self._progress_bar = Progress(
            SpinnerColumn(table_column=Column(max_width=3)),
            TextColumn(text_format="[progress.description]{task.description}", table_column=Column(max_width=30, min_width=15)),
            BarColumn(bar_width=None),
            TaskProgressColumn(table_column=Column(max_width=10)),
            TimeElapsedColumn(table_column=Column(max_width=15)),
            console=self._console, transient=True, expand=True
        )

