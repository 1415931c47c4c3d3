"""CLI Utility Functions"""

import os
import re
import shlex
import subprocess
import sys
import tempfile

from gy import COMMIT_TYPE_NAMES

TYPES_PATTERN = '|'.join(COMMIT_TYPE_NAMES)

SUBJECT_RE = re.compile(rf'^({TYPES_PATTERN})!?(\([^)]*\))?!?:')
LOOSE_SUBJECT_RE = re.compile(rf'^[`\s]*({TYPES_PATTERN})[\(!:]')

# Only a diff header or a fence marks echoed output; index and @@ lines can be prose
ECHO_RE = re.compile(r'^(diff --git |\s*```)')


def clean_commit_message(text: str) -> str:
    """Strip chat preamble and code fences around the commit message.

    A response whose first line is already a conventional subject, with no
    fence or echoed diff anywhere, is returned as is.
    """
    stripped = text.strip()
    lines = stripped.split('\n')
    if SUBJECT_RE.match(lines[0]) and not any(ECHO_RE.match(line) for line in lines):
        return stripped

    start_idx = 0
    for i, line in enumerate(lines):
        if LOOSE_SUBJECT_RE.match(line):
            start_idx = i
            break

    end_idx = len(lines)
    for i in range(start_idx + 1, len(lines)):
        if ECHO_RE.match(lines[i]):
            end_idx = i
            break

    kept = '\n'.join(lines[start_idx:end_idx]).rstrip().split('\n')
    subject = kept[0].strip()
    # `fix: x` wrapped in a pair of backticks, or ```fix: x on a fence line
    if subject.startswith('`') and subject.endswith('`'):
        subject = subject.strip('`').strip()
    elif subject.startswith('```'):
        subject = subject.lstrip('`').strip()
    kept[0] = subject

    return '\n'.join(kept)


def mask_key(key: str) -> str:
    """Show only enough of a key to recognize it."""
    if len(key) <= 12:
        return '*' * len(key)
    return f"{key[:7]}...{key[-4:]}"


def get_editor() -> list[str]:
    editor = os.environ.get('VISUAL') or os.environ.get('EDITOR')
    if not editor:
        editor = 'notepad' if sys.platform == 'win32' else 'vi'
    return shlex.split(editor, posix=sys.platform != 'win32')


def edit_message(message: str) -> str | None:
    """Open message in user's editor. Returns edited text or None on failure."""
    tmp = tempfile.NamedTemporaryFile(mode='w', suffix='.gitcommit', delete=False, encoding='utf-8')
    try:
        tmp.write(message)
        tmp.close()
        subprocess.run([*get_editor(), tmp.name], check=True)
        with open(tmp.name, 'r', encoding='utf-8') as f:
            edited = f.read().strip()
        return edited if edited else None
    except (subprocess.CalledProcessError, OSError):
        return None
    finally:
        try:
            os.unlink(tmp.name)
        except OSError as e:
            print(f"Warning: Could not delete temp file {tmp.name}: {e}", file=sys.stderr)
