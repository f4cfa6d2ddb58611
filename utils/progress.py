"""Progress tracking utilities for ipcamsd.

Provides abstract base class and concrete implementations for:
- Terminal stage messages and in-place per-file download progress
- Silent tracking that records lines (tests, library callers)
"""

import shutil
import time
from abc import ABC, abstractmethod

from utils.common import format_bytes


class ProgressTracker(ABC):
    """Abstract base class for progress tracking.

    Subclasses implement concrete progress display in different environments
    (terminal, silent capture, etc.). Byte progress is scoped to the file
    currently downloading; ``file_done`` closes it before the next one starts.
    """

    def file_done(self, filename: str, size: int, ok: bool = True) -> None:
        """Close the progress line and print the result line of one download."""
        tag = "OK" if ok else "FAIL"
        self.end_progress()
        self.message(f"    [{tag}] {filename} ({format_bytes(size)})")

    @abstractmethod
    def message(self, text: str) -> None:
        """Print one status line. Implemented by subclasses."""
        pass

    @abstractmethod
    def heading(self, text: str) -> None:
        """Print a section heading. Implemented by subclasses."""
        pass

    @abstractmethod
    def file_progress(self, filename: str, downloaded: int, total: int) -> None:
        """Update byte progress of the current file. Implemented by subclasses."""
        pass

    @abstractmethod
    def inline(self, text: str) -> None:
        """Rewrite the current line in place. Implemented by subclasses."""
        pass

    @abstractmethod
    def end_progress(self) -> None:
        """Terminate an in-place progress line. Implemented by subclasses."""
        pass


class TerminalProgressTracker(ProgressTracker):
    """Progress tracker for terminal/CLI output.

    Stage messages are printed as plain lines; download progress is rewritten
    in place with ``\\r`` and throttled to one update every ``interval`` seconds.
    """

    def __init__(self, interval: float = 0.25):
        """Initialize terminal progress tracker.

        Args:
            interval: Minimum seconds between two progress redraws
        """
        super().__init__()
        self.interval = interval
        self.term_width = shutil.get_terminal_size((80, 24)).columns
        self._last_progress_time = 0.0
        self._in_progress = False

    def _bar(self, fraction: float, width: int = 20) -> str:
        filled = int(fraction * width)
        return "[" + "#" * filled + "." * (width - filled) + "]"

    def message(self, text: str) -> None:
        """Print a status line."""
        self.end_progress()
        print(text, flush=True)

    def heading(self, text: str) -> None:
        """Print a heading underlined to its own width."""
        self.end_progress()
        print(f"\n{text}\n{'-' * len(text)}", flush=True)

    def file_progress(self, filename: str, downloaded: int, total: int) -> None:
        """Print per-file download progress in place."""
        name = filename[:40] + "..." if len(filename) > 43 else filename
        if total <= 0:
            self.inline(f"    {name}  {format_bytes(downloaded)}")
            return
        frac = min(1.0, downloaded / total)
        self.inline(
            f"    {name}  {self._bar(frac)} {frac * 100:5.1f}%  "
            f"{format_bytes(downloaded)}/{format_bytes(total)}"
        )

    def inline(self, text: str) -> None:
        """Rewrite the current line, at most once per ``interval``."""
        now = time.time()
        if now - self._last_progress_time < self.interval:
            return
        self._last_progress_time = now
        self._in_progress = True
        line = f"\r{text}"
        print(f"{line:<{self.term_width}}", end="", flush=True)

    def end_progress(self) -> None:
        """Move past an in-place progress line, if one is open."""
        if self._in_progress:
            print(flush=True)
            self._in_progress = False
            self._last_progress_time = 0.0


class SilentProgressTracker(ProgressTracker):
    """Progress tracker that doesn't display anything.

    Lines are kept in ``lines`` so tests and library callers can inspect
    what would have been printed.
    """

    def __init__(self):
        super().__init__()
        self.lines: list[str] = []
        self.progress_updates = 0

    def message(self, text: str) -> None:
        self.lines.append(text)

    def heading(self, text: str) -> None:
        self.lines.append(text)

    def file_progress(self, filename: str, downloaded: int, total: int) -> None:
        self.progress_updates += 1

    def inline(self, text: str) -> None:
        self.progress_updates += 1

    def end_progress(self) -> None:
        """No-op."""
        pass
