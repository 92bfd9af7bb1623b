"""External source formatter (rustfmt by default).

The formatter is a local, non-interactive round trip; any non-zero exit or
anything written to stderr fails the run.
"""

import subprocess
from pathlib import Path

from alpaca_codegen.errors import FormatterError


def _run(command: list[str], input_text: str | None = None) -> subprocess.CompletedProcess:
    if not command:
        raise FormatterError("No formatter command configured")
    try:
        result = subprocess.run(command, input=input_text, capture_output=True, text=True)
    except OSError as e:
        raise FormatterError(f"Could not run {command[0]}: {e}") from e

    if result.returncode != 0 or result.stderr.strip():
        detail = result.stderr.strip() or result.stdout.strip()
        raise FormatterError(f"{' '.join(command)} failed with exit code {result.returncode}: {detail[:500]}")
    return result


def format_source(text: str, command: list[str]) -> str:
    """Pipe ``text`` through the formatter and return its output."""
    return _run(command, input_text=text).stdout


def format_file(file_path: Path, command: list[str]) -> None:
    """Format a file in place (the path is appended to ``command``)."""
    _run([*command, str(file_path)])
