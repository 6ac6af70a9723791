"""
Loading of line-oriented resource files (vocabulary, special tokens, keyword lists).

Resources are injected as explicit paths; locating them (package data, model
bundles, mounted volumes) is the caller's concern.
"""

from pathlib import Path

import structlog

from toxicity_filter.exceptions import ResourceLoadError

logger = structlog.get_logger(__name__)


def read_resource_lines(path: str | Path) -> list[str]:
    """
    Read a UTF-8 text resource and return its lines (without line endings).

    Args:
        path: Path to the resource file

    Returns:
        List of lines, in file order

    Raises:
        ResourceLoadError: File missing, unreadable or not valid UTF-8
    """
    resource_path = Path(path)
    try:
        content = resource_path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise ResourceLoadError(
            f"Resource file not found: {resource_path}",
            path=str(resource_path),
            reason="not_found",
        ) from e
    except (OSError, UnicodeDecodeError) as e:
        raise ResourceLoadError(
            f"Failed to read resource file: {resource_path}",
            path=str(resource_path),
            reason=type(e).__name__,
        ) from e

    lines = content.splitlines()
    logger.debug("Loaded resource", path=str(resource_path), line_count=len(lines))
    return lines
