from a11yaudit.engine import run

__version__ = "0.3.0"

__all__ = ["run", "__version__"]
