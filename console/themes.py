from rich.style import Style
from rich.theme import Theme


class HNDarkTheme(Theme):
    """
    Dark color palette for console output.

    Message types (notification, complete, warning, error, success) each get
    an icon style and a content style; progress bars, rules, timestamps and
    metric tables share the same palette.
    """
    BLUE = '#61AFEF'
    RICH_BLUE = '#4B6BFF'
    CYAN = '#56B6C2'
    GREEN = '#98C379'
    YELLOW = '#E5C07B'
    RED = '#E06C75'
    ORANGE = '#D19A66'
    MED_GREY = '#8A8F98'
    PURPLE = '#663399'
    DARK_PURPLE = '#4B0082'
    MAGENTA = '#BE50AE'
    PINK = '#FF69B4'
    RICH_PINK = '#FF1493'
    DEFAULT_TEXT = '#F8E8EC'

    def __init__(self):
        super().__init__({
            "text": Style(color=self.DEFAULT_TEXT),

            # Content type styles
            "notification.icon": Style(color=self.PURPLE),
            "notification.content": Style(color=self.BLUE),
            "complete.icon": Style(color=self.GREEN),
            "complete.content": Style(color=self.BLUE),
            "warning.icon": Style(color=self.ORANGE),
            "warning.content": Style(color=self.YELLOW),
            "error.icon": Style(color=self.RED),
            "error.content": Style(color=self.RED),
            "success": Style(color=self.GREEN, bold=True),

            # Rules
            "rule.text": Style(color=self.ORANGE),
            "rule.line": Style(color=self.BLUE),

            # Time display
            "time.numbers": Style(color=self.ORANGE),
            "time.brackets": Style(color=self.DARK_PURPLE),

            # Progress
            "bar.complete": Style(color=self.RICH_BLUE),
            "bar.finished": Style(color=self.GREEN),
            "bar.pulse": Style(color=self.RICH_PINK),
            "progress.description": Style(color=self.RICH_BLUE),
            "progress.elapsed": Style(color=self.YELLOW),
            "progress.percentage": Style(color=self.RICH_BLUE),
            "progress.remaining": Style(color=self.PINK),
            "progress.spinner": Style(color=self.RICH_PINK),

            # Metrics
            "metric.value": Style(color=self.CYAN),
            "metric.label": Style(color=self.MED_GREY),
            "table.header": Style(color=self.MED_GREY, bold=True),
            "path": Style(color=self.GREEN),
            "detail": Style(color=self.MED_GREY),
        })
