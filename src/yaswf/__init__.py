"""yaswf - companion for the yaswf watchface configuration page"""

__version__ = "1.0.0"
__description__ = "Companion for the yaswf watchface configuration page"

__all__ = ["main", "Companion", "__version__"]


def __getattr__(name: str):
    """Lazy import so that importing yaswf.core does not load dotenv config."""
    if name == "Companion":
        from .main import Companion

        return Companion
    if name == "main":
        from .main import main

        return main
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
