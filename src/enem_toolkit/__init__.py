"""Top-level package for the ENEM practice quiz toolkit.

Provides subpackages:
- enem_toolkit.core – immutable data models and payload schema
- enem_toolkit.loader – slot resolution, fetching and batched exam loading
- enem_toolkit.scoring – local scoring of a submitted answer sheet
- enem_toolkit.controller – single owner of the quiz session state
"""

def _get_version() -> str:
    """Get version from pyproject.toml (dev) or importlib.metadata (installed)."""
    from pathlib import Path

    pyproject = Path(__file__).resolve().parent.parent.parent / "pyproject.toml"
    if pyproject.exists():
        try:
            content = pyproject.read_text()
            for line in content.splitlines():
                if line.strip().startswith("version"):
                    # Parse: version = "0.1.0"
                    return line.split("=")[1].strip().strip('"').strip("'")
        except OSError:
            pass

    # Fallback to importlib.metadata for installed package
    from importlib.metadata import PackageNotFoundError, version as pkg_version
    try:
        return pkg_version("enem_toolkit")
    except PackageNotFoundError:
        return "0.0.0"

__version__ = _get_version()
__all__: list[str] = ["__version__"]
