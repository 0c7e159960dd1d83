"""
Results file discovery utilities.

Resolves the files given on the command line and the files found in an input
directory into a single ordered list of xUnit results files.
"""

from pathlib import Path
from typing import Iterable, List, Optional

from xunit_reporter.core.errors import NoInputError, PathNotFoundError


RESULTS_GLOB = "*.xml"


def find_results_in_dir(input_dir: Path) -> List[Path]:
    """
    Find results files directly inside a directory.

    Args:
        input_dir: Directory to scan (not recursive)

    Returns:
        Sorted list of ``*.xml`` files

    Raises:
        PathNotFoundError: If the directory doesn't exist
    """
    input_dir = Path(input_dir)
    if not input_dir.is_dir():
        raise PathNotFoundError(f"Input directory not found: {input_dir}")
    return sorted(p.resolve() for p in input_dir.glob(RESULTS_GLOB) if p.is_file())


def find_results_files(
    inputs: Iterable[Path] = (),
    input_dir: Optional[Path] = None,
) -> List[Path]:
    """
    Collect results files from explicit paths and an optional directory.

    Explicit files come first, in the order given, followed by the directory
    contents. Duplicates are dropped.

    Raises:
        PathNotFoundError: If an explicit file doesn't exist
        NoInputError: If nothing was found
    """
    files: List[Path] = []
    for path in inputs:
        path = Path(path)
        if not path.is_file():
            raise PathNotFoundError(f"Results file not found: {path}")
        files.append(path.resolve())

    if input_dir is not None:
        files.extend(find_results_in_dir(input_dir))

    unique: List[Path] = []
    seen = set()
    for path in files:
        if path not in seen:
            seen.add(path)
            unique.append(path)

    if not unique:
        where = f" in {input_dir}" if input_dir is not None else ""
        raise NoInputError(f"No xUnit results files found{where}")
    return unique
