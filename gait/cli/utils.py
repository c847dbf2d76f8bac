"""Interactive helpers: clipboard, editor and prompts"""

import getpass
import os
import shlex
import subprocess
import sys
import tempfile

from gait.output import dim, info

# Tried in order; the first one found on PATH is used
CLIPBOARD_COMMANDS = {
    'win32': [['clip']],
    'darwin': [['pbcopy']],
    'linux': [['xclip', '-selection', 'clipboard'], ['xsel', '--clipboard', '--input']],
}


def copy_to_clipboard(text: str) -> tuple[bool, str]:
    """Copy text to the system clipboard. Returns (copied, reason_if_not)."""
    commands = CLIPBOARD_COMMANDS.get(sys.platform, CLIPBOARD_COMMANDS['linux'])
    data = text.encode('utf-8')

    for command in commands:
        try:
            subprocess.run(command, input=data, check=True, capture_output=True)
            return True, ""
        except FileNotFoundError:
            continue
        except (subprocess.CalledProcessError, OSError) as e:
            return False, f"{command[0]} failed: {e}"

    if sys.platform == 'linux':
        return False, "Install xclip or xsel: sudo apt install xclip"
    return False, "No clipboard tool found"


def _editor_command() -> list[str]:
    editor = os.environ.get('VISUAL') or os.environ.get('EDITOR')
    if editor:
        # Allow values like "code --wait"
        return shlex.split(editor, posix=sys.platform != 'win32')
    return ['notepad' if sys.platform == 'win32' else 'vi']


def edit_message(message: str) -> str | None:
    """Open message in $VISUAL / $EDITOR. Returns the edited text, or None if empty or the editor failed."""
    fd, path = tempfile.mkstemp(suffix='.gitcommit', text=True)
    try:
        with os.fdopen(fd, 'w', encoding='utf-8') as f:
            f.write(message + '\n')
        subprocess.run([*_editor_command(), path], check=True)
        with open(path, 'r', encoding='utf-8') as f:
            edited = f.read().strip()
    except (subprocess.CalledProcessError, OSError) as e:
        print(dim(f"Editor failed: {e}"), file=sys.stderr)
        return None
    finally:
        if os.path.exists(path):
            os.unlink(path)
    return edited or None


def prompt_text(label: str, default: str | None = None, required: bool = True, secret: bool = False) -> str:
    """Ask for a line of input, re-asking while a required answer is empty."""
    suffix = f" [{dim(default)}]" if default and not secret else ""
    while True:
        if secret:
            answer = getpass.getpass(f"{label}: ").strip()
        else:
            answer = input(f"{label}{suffix}: ").strip()
        answer = answer or (default or "")
        if answer or not required:
            return answer
        print(dim(f"  {label} is required"))


def prompt_choice(label: str, choices: list[tuple[str, str]]) -> str | None:
    """Numbered menu of (value, description) pairs. Returns the value, or None on quit."""
    print(f"\n{label}\n")
    for i, (_, description) in enumerate(choices, 1):
        print(f"  {info(str(i))}. {description}")
    print()

    while True:
        try:
            choice = input(f"Select [1-{len(choices)}] or (q)uit: ").strip().lower()
        except (KeyboardInterrupt, EOFError):
            return None
        if choice == 'q':
            return None
        if choice.isdigit() and 1 <= int(choice) <= len(choices):
            return choices[int(choice) - 1][0]
        print(f"Enter 1-{len(choices)} or q")


def confirm(question: str, default: bool = True) -> bool:
    hint = "[Y/n]" if default else "[y/N]"
    try:
        answer = input(f"{question} {hint}: ").strip().lower()
    except (KeyboardInterrupt, EOFError):
        return False
    if not answer:
        return default
    return answer in ('y', 'yes')
