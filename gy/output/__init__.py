"""Terminal Output for gy

Colors are on only when stdout is a terminal, unless NO_COLOR or
FORCE_COLOR says otherwise. Errors and warnings go to stderr.
"""

import os
import re
import sys
import threading

from gy import COMMIT_TYPE_NAMES

RESET = '\033[0m'
BOLD = '\033[1m'
DIM = '\033[2m'
RED = '\033[31m'
GREEN = '\033[32m'
YELLOW = '\033[33m'
MAGENTA = '\033[35m'
CYAN = '\033[36m'

CLEAR_LINE = '\r\033[K'


def _enable_windows_ansi() -> bool:
    try:
        import ctypes
        kernel32 = ctypes.windll.kernel32
        return bool(kernel32.SetConsoleMode(kernel32.GetStdHandle(-11), 7))
    except (AttributeError, OSError):
        return False


def _color_enabled(stream) -> bool:
    if os.environ.get('NO_COLOR'):
        return False
    if os.environ.get('FORCE_COLOR'):
        return True
    if not getattr(stream, 'isatty', None) or not stream.isatty():
        return False
    return _enable_windows_ansi() if sys.platform == 'win32' else True


def _can_encode(symbol: str, stream) -> bool:
    try:
        symbol.encode(getattr(stream, 'encoding', None) or 'utf-8')
        return True
    except (UnicodeEncodeError, LookupError):
        return False


COLORS_ENABLED = _color_enabled(sys.stdout)
UNICODE_ENABLED = _can_encode('✓─⠋', sys.stdout)

CHECK = '✓' if UNICODE_ENABLED else '[OK]'
CROSS = '✗' if UNICODE_ENABLED else '[X]'
WARN = '⚠' if UNICODE_ENABLED else '[!]'
RULE = '─' if UNICODE_ENABLED else '-'


def _paint(text: str, *codes: str) -> str:
    if not COLORS_ENABLED:
        return text
    return f"{''.join(codes)}{text}{RESET}"


def success(text: str) -> str:
    return _paint(text, GREEN)


def error(text: str) -> str:
    return _paint(text, RED)


def warning(text: str) -> str:
    return _paint(text, YELLOW)


def info(text: str) -> str:
    return _paint(text, CYAN)


def dim(text: str) -> str:
    return _paint(text, DIM)


def bold(text: str) -> str:
    return _paint(text, BOLD)


def rule(width: int) -> str:
    return dim(RULE * width)


def print_success(message: str) -> None:
    print(f"{success(CHECK)} {message}")


def print_error(message: str) -> None:
    print(f"{error(CROSS)} {error(message)}", file=sys.stderr)


def print_warning(message: str) -> None:
    print(f"{warning(WARN)} {warning(message)}", file=sys.stderr)


# Types without an entry keep the plain bold subject
_TYPE_COLORS = {
    'feat': GREEN,
    'fix': RED,
    'refactor': YELLOW,
    'perf': GREEN,
    'test': MAGENTA,
    'docs': CYAN,
    'ci': CYAN,
    'build': CYAN,
}

_TYPE_PREFIX_RE = re.compile(rf'^({"|".join(COMMIT_TYPE_NAMES)})!?(\([^)]*\))?!?:')


def colorize_commit_type(message: str) -> str:
    """Color the `type(scope):` prefix of the subject line."""
    if not COLORS_ENABLED:
        return message
    subject, sep, body = message.partition('\n')
    match = _TYPE_PREFIX_RE.match(subject)
    if not match:
        return message
    color = _TYPE_COLORS.get(match.group(1), DIM)
    prefix = match.group(0)
    return _paint(prefix, BOLD, color) + subject[len(prefix):] + sep + body


class Status:
    """One status line around a blocking call.

    Prints ``label`` and then ``done`` on the same line when the block
    succeeds, or just ends the line when it raises. On a terminal the
    label carries an animated spinner while the block runs.
    """

    FRAMES_UNICODE = '⠋⠙⠹⠸⠼⠴⠦⠧⠇⠏'
    FRAMES_ASCII = '-\\|/'

    def __init__(self, label: str, done: str = "done!"):
        self.label = label
        self.done = done
        self._animate = sys.stdout.isatty()
        self._frames = self.FRAMES_UNICODE if UNICODE_ENABLED else self.FRAMES_ASCII
        self._stop = threading.Event()
        self._thread = None

    def _spin(self):
        idx = 0
        while not self._stop.is_set():
            frame = self._frames[idx % len(self._frames)]
            print(f"{CLEAR_LINE}{self.label}{dim(frame)} ", end='', flush=True)
            idx += 1
            self._stop.wait(0.08)

    def __enter__(self):
        if self._animate:
            self._thread = threading.Thread(target=self._spin, daemon=True)
            self._thread.start()
        else:
            print(self.label, end='', flush=True)
        return self

    def __exit__(self, exc_type, exc, tb):
        self._stop.set()
        if self._thread:
            self._thread.join()
            # Redraw without the spinner frame
            print(f"{CLEAR_LINE}{self.label}", end='')
        if exc_type is None:
            print(success(self.done))
        else:
            print()
        return False
