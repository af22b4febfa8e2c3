"""
Console logging for Simple Talk.

Every line carries a wall-clock timestamp, the time elapsed since startup and
a short colour-coded category tag:

- ENV: configuration (.env, base URL)
- API: calls to the simplification / speech backend
- TTS: audio download, load and playback
- UI: card transitions and user actions
- TASK: background worker threads

Usage:
    from simple_talk.logger import logger, Timer

    logger.api_call("/speak")
    with Timer() as timer:
        ...
    logger.api_response("/speak", duration_ms=timer.duration_ms)
"""

import sys
import time
import traceback
from datetime import datetime
from typing import Optional

# Korean text and symbols must survive consoles that default to a legacy codepage
if hasattr(sys.stdout, "reconfigure"):
    sys.stdout.reconfigure(encoding="utf-8")
if hasattr(sys.stderr, "reconfigure"):
    sys.stderr.reconfigure(encoding="utf-8")


class ColorCodes:
    """ANSI escape sequences."""
    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    BLUE = "\033[34m"
    MAGENTA = "\033[35m"
    CYAN = "\033[36m"
    WHITE = "\033[37m"

    BRIGHT_RED = "\033[91m"
    BRIGHT_GREEN = "\033[92m"
    BRIGHT_YELLOW = "\033[93m"
    BRIGHT_BLUE = "\033[94m"
    BRIGHT_CYAN = "\033[96m"


class DebugLogger:
    """Categorised, colour-coded console logger."""

    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        self._start_time = datetime.now()

    def _timestamp(self) -> str:
        now = datetime.now()
        elapsed = (now - self._start_time).total_seconds()
        return f"{now.strftime('%H:%M:%S')}.{now.microsecond // 1000:03d} (+{elapsed:>6.1f}s)"

    def _log(self, category: str, color: str, message: str, **kwargs) -> None:
        if not self.enabled:
            return

        timestamp = self._timestamp()
        padding = " " * (len(timestamp) + 8)
        tag = f"{color}{ColorCodes.BOLD}[{category:>4}]{ColorCodes.RESET}"
        stream = sys.stderr if kwargs.get("stderr") else sys.stdout

        for i, line in enumerate(str(message).split("\n")):
            if i == 0:
                print(f"{ColorCodes.DIM}{timestamp}{ColorCodes.RESET} {tag} {line}", file=stream, flush=True)
            else:
                print(f"{ColorCodes.DIM}{padding}{ColorCodes.RESET}{line}", file=stream, flush=True)

        if kwargs.get("exc_info"):
            for line in traceback.format_exc().split("\n"):
                if line.strip():
                    print(f"{ColorCodes.DIM}{padding}{ColorCodes.RED}{line}{ColorCodes.RESET}",
                          file=sys.stderr, flush=True)

    # === Configuration ===
    def env(self, message: str, **kwargs) -> None:
        self._log("ENV", ColorCodes.MAGENTA, message, **kwargs)

    def env_success(self, message: str, **kwargs) -> None:
        self._log("ENV", ColorCodes.GREEN, f"✓ {message}", **kwargs)

    # === Backend calls ===
    def api(self, message: str, **kwargs) -> None:
        self._log("API", ColorCodes.CYAN, message, **kwargs)

    def api_call(self, endpoint: str, **kwargs) -> None:
        """Log an outbound request."""
        self._log("API", ColorCodes.CYAN, f"→ POST {endpoint}", **kwargs)

    def api_response(self, endpoint: str, status: Optional[int] = None,
                     duration_ms: Optional[float] = None, **kwargs) -> None:
        """Log a response, with its status code and latency when known."""
        status_info = f" [{status}]" if status is not None else ""
        duration_info = f" ({duration_ms:.0f}ms)" if duration_ms else ""
        self._log("API", ColorCodes.BRIGHT_CYAN,
                  f"← Response from {endpoint}{status_info}{duration_info}", **kwargs)

    def api_error(self, message: str, **kwargs) -> None:
        self._log("API", ColorCodes.BRIGHT_RED, f"✗ {message}", **kwargs)

    # === Audio ===
    def audio(self, message: str, **kwargs) -> None:
        self._log("TTS", ColorCodes.YELLOW, message, **kwargs)

    def audio_error(self, message: str, **kwargs) -> None:
        self._log("TTS", ColorCodes.BRIGHT_RED, f"✗ {message}", **kwargs)

    # === UI ===
    def ui(self, message: str, **kwargs) -> None:
        self._log("UI", ColorCodes.BLUE, message, **kwargs)

    def ui_transition(self, from_state: str, to_state: str, **kwargs) -> None:
        self._log("UI", ColorCodes.BRIGHT_BLUE, f"{from_state} → {to_state}", **kwargs)

    # === Background tasks ===
    def task_start(self, task_name: str, **kwargs) -> None:
        self._log("TASK", ColorCodes.WHITE, f"⚡ Starting: {task_name}", **kwargs)

    def task_complete(self, task_name: str, duration_ms: Optional[float] = None, **kwargs) -> None:
        duration_info = f" ({duration_ms:.0f}ms)" if duration_ms else ""
        self._log("TASK", ColorCodes.BRIGHT_GREEN, f"✓ Completed: {task_name}{duration_info}", **kwargs)

    def task_error(self, task_name: str, error: str, **kwargs) -> None:
        self._log("TASK", ColorCodes.BRIGHT_RED, f"✗ Failed: {task_name} - {error}", **kwargs)

    # === General ===
    def success(self, message: str, **kwargs) -> None:
        self._log("OK", ColorCodes.BRIGHT_GREEN, f"✓ {message}", **kwargs)

    def warning(self, message: str, **kwargs) -> None:
        self._log("WARN", ColorCodes.BRIGHT_YELLOW, f"⚠ {message}", **kwargs)

    def error(self, message: str, **kwargs) -> None:
        self._log("ERR", ColorCodes.BRIGHT_RED, f"✗ {message}", stderr=True, **kwargs)

    def info(self, message: str, **kwargs) -> None:
        self._log("INFO", ColorCodes.WHITE, message, **kwargs)

    def debug(self, message: str, **kwargs) -> None:
        self._log("DBG", ColorCodes.DIM, message, **kwargs)

    def separator(self, title: Optional[str] = None) -> None:
        if not self.enabled:
            return
        line = f"{'─' * 20} {title} {'─' * 20}" if title else "─" * 60
        print(f"\n{ColorCodes.DIM}{line}{ColorCodes.RESET}\n", file=sys.stdout, flush=True)

    def banner(self, text: str) -> None:
        if not self.enabled:
            return
        width = max(60, len(text) + 4)
        border = "═" * width
        padding = " " * ((width - len(text)) // 2)
        print(f"\n{ColorCodes.BRIGHT_CYAN}{border}{ColorCodes.RESET}", file=sys.stdout, flush=True)
        print(f"{ColorCodes.BRIGHT_CYAN}║{padding}{ColorCodes.BOLD}{text}{ColorCodes.RESET}"
              f"{ColorCodes.BRIGHT_CYAN}{padding}║{ColorCodes.RESET}", file=sys.stdout, flush=True)
        print(f"{ColorCodes.BRIGHT_CYAN}{border}{ColorCodes.RESET}\n", file=sys.stdout, flush=True)


logger = DebugLogger(enabled=True)


class Timer:
    """Context manager measuring wall time in milliseconds."""

    def __init__(self):
        self.start_time: Optional[float] = None
        self.duration_ms: float = 0

    def __enter__(self) -> "Timer":
        self.start_time = time.perf_counter()
        return self

    def __exit__(self, *args) -> None:
        if self.start_time:
            self.duration_ms = (time.perf_counter() - self.start_time) * 1000
