"""Rich-based logging"""

from rich.console import Console
from rich.theme import Theme
from rich.markup import escape
from pathlib import Path
from datetime import datetime
from typing import Optional

custom_theme = Theme({
    "info": "cyan",
    "success": "bold green",
    "error": "bold red",
    "action": "bold magenta",
    "debug": "dim",
    "title": "bold blue",
})

# Messages go to stderr so stdout stays clean for scripts
console = Console(theme=custom_theme, stderr=True)


class Logger:
    """Logger with colors and optional log file"""

    def __init__(self, log_file: Optional[Path] = None, verbose: bool = False, quiet: bool = False,
                 out: Optional[Console] = None):
        self.log_file = log_file
        self.verbose = verbose
        self.quiet = quiet
        self.console = out or console

    def _write_to_file(self, message: str, level: str):
        """Append message to the log file"""
        if self.log_file:
            timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
            with open(self.log_file, "a", encoding="utf-8") as f:
                f.write(f"[{timestamp}] [{level}] {message}\n")

    def info(self, message: str):
        if not self.quiet:
            self.console.print(f"[info]ℹ {escape(message)}[/info]")
        self._write_to_file(message, "INFO")

    def success(self, message: str):
        if not self.quiet:
            self.console.print(f"[success]✓ {escape(message)}[/success]")
        self._write_to_file(message, "SUCCESS")

    def error(self, message: str):
        """Errors are printed even in quiet mode"""
        self.console.print(f"[error]✗ {escape(message)}[/error]")
        self._write_to_file(message, "ERROR")

    def action(self, message: str):
        """Step being executed"""
        if not self.quiet:
            self.console.print(f"[action]→ {escape(message)}[/action]")
        self._write_to_file(message, "ACTION")

    def debug(self, message: str):
        """Debug message (verbose only)"""
        if self.verbose:
            self.console.print(f"[debug]🐛 {escape(message)}[/debug]")
        self._write_to_file(message, "DEBUG")


_logger: Optional[Logger] = None


def get_logger() -> Logger:
    """Return the global logger"""
    global _logger
    if _logger is None:
        _logger = Logger()
    return _logger


def set_logger(logger: Logger):
    """Set the global logger"""
    global _logger
    _logger = logger
