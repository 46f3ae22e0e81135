"""Pattern-following color game predictor."""

__all__ = [
    "cli",
    "config",
    "constants",
    "exceptions",
    "models",
    "normalization",
    "ops",
    "review",
    "storage",
    "utils",
]

__version__ = "0.1.0"
