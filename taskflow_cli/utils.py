"""Utility functions for the taskflow CLI."""
from pathlib import Path

from rich.console import Console

console = Console()
err_console = Console(stderr=True)

SYLLABUS_SUFFIXES = (".pdf", ".txt")


def expand_syllabus_paths(paths: tuple[str, ...]) -> list[Path]:
    """Expand paths to include all syllabus files in directories.

    Args:
        paths: Tuple of file paths and/or directory paths

    Returns:
        List of PDF and text file paths with directories expanded

    Raises:
        SystemExit: If a path is missing or a directory holds no syllabus files
    """
    files: list[Path] = []

    for path_str in paths:
        path = Path(path_str)

        if path.is_file():
            files.append(path)
        elif path.is_dir():
            found = sorted(p for p in path.iterdir() if p.is_file() and p.suffix.lower() in SYLLABUS_SUFFIXES)

            if not found:
                err_console.print(f"[red]Error:[/red] Directory '{path_str}' contains no PDF or .txt files.")
                raise SystemExit(1)

            files.extend(found)
        else:
            err_console.print(f"[red]Error:[/red] Path '{path_str}' does not exist.")
            raise SystemExit(1)

    return files


def truncate_title(title: str, max_length: int = 45) -> str:
    """Truncate title to max_length characters, adding ellipsis if needed."""
    if len(title) <= max_length:
        return title
    return title[:max_length - 3] + "..."
