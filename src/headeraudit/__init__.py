"""headeraudit package."""

from importlib.metadata import PackageNotFoundError, version as _pkg_version

try:
    __version__ = _pkg_version("headeraudit")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"

__all__ = ["__version__", "app", "main"]


def __getattr__(name: str):
    if name in ("app", "main"):
        from headeraudit.cli import app, main

        return {"app": app, "main": main}[name]
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


def __dir__() -> list[str]:
    return sorted(__all__)
