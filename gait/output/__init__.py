"""Terminal Output Formatting Package"""

import logging
import os
import re
import sys
import threading


class Colors:
    """ANSI escape codes for terminal colors."""
    RESET = '\033[0m'
    BOLD = '\033[1m'
    DIM = '\033[2m'
    RED = '\033[31m'
    GREEN = '\033[32m'
    YELLOW = '\033[33m'
    BLUE = '\033[34m'
    MAGENTA = '\033[35m'
    CYAN = '\033[36m'


def _supports_color() -> bool:
    if os.environ.get('NO_COLOR'):
        return False
    if os.environ.get('FORCE_COLOR'):
        return True
    if not hasattr(sys.stdout, 'isatty') or not sys.stdout.isatty():
        return False
    if sys.platform == 'win32':
        try:
            import ctypes
            kernel32 = ctypes.windll.kernel32
            kernel32.SetConsoleMode(kernel32.GetStdHandle(-11), 7)
            return True
        except (AttributeError, OSError):
            return False
    return True


def _supports_unicode() -> bool:
    if sys.platform == 'win32':
        try:
            '✓'.encode(sys.stdout.encoding or 'utf-8')
            return True
        except (UnicodeEncodeError, LookupError):
            return False
    return True


COLORS_ENABLED = _supports_color()
UNICODE_ENABLED = _supports_unicode()

CHECK = '✓' if UNICODE_ENABLED else '[OK]'
CROSS = '✗' if UNICODE_ENABLED else '[X]'
WARN = '⚠' if UNICODE_ENABLED else '[!]'
INFO = 'ℹ' if UNICODE_ENABLED else '[i]'
BULLET = '•' if UNICODE_ENABLED else '*'
RULE = '─' if UNICODE_ENABLED else '-'


def _colorize(text: str, *codes: str) -> str:
    if not COLORS_ENABLED:
        return text
    return f"{''.join(codes)}{text}{Colors.RESET}"


def success(text: str) -> str:
    return _colorize(text, Colors.GREEN)


def error(text: str) -> str:
    return _colorize(text, Colors.RED)


def warning(text: str) -> str:
    return _colorize(text, Colors.YELLOW)


def info(text: str) -> str:
    return _colorize(text, Colors.CYAN)


def dim(text: str) -> str:
    return _colorize(text, Colors.DIM)


def bold(text: str) -> str:
    return _colorize(text, Colors.BOLD)


def highlight(text: str) -> str:
    return _colorize(text, Colors.MAGENTA)


def print_success(message: str) -> None:
    print(f"{success(CHECK)} {message}")


def print_error(message: str) -> None:
    print(f"{error(CROSS)} {error(message)}", file=sys.stderr)


def print_warning(message: str) -> None:
    print(f"{warning(WARN)} {warning(message)}")


def print_hint(message: str) -> None:
    print(f"  {warning(message)}", file=sys.stderr)


def print_rule(width: int = 60) -> None:
    print(dim(RULE * width))


COMMIT_TYPE_COLORS = {
    'feat': Colors.GREEN,
    'fix': Colors.RED,
    'refactor': Colors.YELLOW,
    'docs': Colors.CYAN,
    'test': Colors.MAGENTA,
    'perf': Colors.GREEN,
    'chore': Colors.DIM,
    'style': Colors.DIM,
    'ci': Colors.CYAN,
    'build': Colors.CYAN,
    'revert': Colors.YELLOW,
}


def colorize_commit_type(message: str) -> str:
    """Color the commit type prefix on the first line of a commit message."""
    if not COLORS_ENABLED:
        return message
    lines = message.split('\n')
    match = re.match(r'^(\w+)(\([^)]*\))?(!?:)', lines[0])
    if match:
        color = COMMIT_TYPE_COLORS.get(match.group(1))
        if color:
            prefix = match.group(0)
            lines[0] = _colorize(prefix, Colors.BOLD, color) + lines[0][len(prefix):]
    return '\n'.join(lines)


def display_message(message: str) -> None:
    """Print a commit message between horizontal rules, type prefix colored."""
    width = max((len(line) for line in message.split('\n')), default=40)
    width = max(width, 40)
    lines = colorize_commit_type(message).split('\n')
    print()
    print_rule(width)
    print(bold(lines[0]))
    for line in lines[1:]:
        print(line)
    print_rule(width)


_SUGGESTION_STYLES = {
    'error': (CROSS, error),
    'warning': (WARN, warning),
    'info': (INFO, info),
}


def format_suggestions(suggestions) -> str:
    """One indented line per suggestion, icon and color by type."""
    lines = []
    for suggestion in suggestions:
        icon, color = _SUGGESTION_STYLES.get(suggestion.type, (BULLET, dim))
        lines.append(f"   {color(icon)} {suggestion.message}")
    return '\n'.join(lines)


def format_validation(result) -> str:
    """Errors then warnings of a ValidationResult, one per line."""
    lines = [f"   {error(CROSS)} {e}" for e in result.errors]
    lines.extend(f"   {warning(WARN)} {w}" for w in result.warnings)
    return '\n'.join(lines)


def configure_logging(verbose: bool = False) -> None:
    """Send library log records to stderr; DEBUG with --verbose, WARNING otherwise."""
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(dim('%(levelname)s %(name)s: %(message)s')))
    root = logging.getLogger('gait')
    root.handlers[:] = [handler]
    root.setLevel(logging.DEBUG if verbose else logging.WARNING)
    root.propagate = False


class Spinner:
    """Animated spinner for long operations. Use as context manager."""
    FRAMES_UNICODE = ['⠋', '⠙', '⠹', '⠸', '⠼', '⠴', '⠦', '⠧', '⠇', '⠏']
    FRAMES_ASCII = ['-', '\\', '|', '/']

    def __init__(self, text: str = ""):
        self.text = text
        self._thread = None
        self._stop_event = threading.Event()
        self._frames = self.FRAMES_UNICODE if UNICODE_ENABLED else self.FRAMES_ASCII

    def _spin(self):
        idx = 0
        while not self._stop_event.is_set():
            frame = self._frames[idx % len(self._frames)]
            print(f'\r\033[K{frame} {self.text}', end='', flush=True)
            idx += 1
            self._stop_event.wait(0.08)

    def __enter__(self):
        if sys.stdout.isatty():
            self._stop_event.clear()
            self._thread = threading.Thread(target=self._spin, daemon=True)
            self._thread.start()
        return self

    def __exit__(self, *args):
        self._stop_event.set()
        if self._thread:
            self._thread.join()
        if sys.stdout.isatty():
            print('\r\033[K', end='', flush=True)


__all__ = [
    "Colors", "COLORS_ENABLED", "UNICODE_ENABLED",
    "CHECK", "CROSS", "WARN", "INFO", "BULLET", "RULE",
    "success", "error", "warning", "info", "dim", "bold", "highlight",
    "print_success", "print_error", "print_warning", "print_hint", "print_rule",
    "colorize_commit_type", "display_message", "format_suggestions", "format_validation",
    "configure_logging", "Spinner", "COMMIT_TYPE_COLORS",
]
