from pathlib import Path


def find_project_root(start: Path | None = None) -> Path:
    """Get the source checkout to deploy.

    Walks up from ``start`` (default: the current directory) to find the
    repository root, identified by the presence of a ``.git`` entry.

    Returns:
        Path to the repository root, or ``start`` itself if none is found
    """
    current = (start or Path.cwd()).resolve()

    # Walk up the directory tree looking for .git
    for parent in [current, *current.parents]:
        if (parent / ".git").exists():
            return parent

    return current
