"""
Custom exceptions for colorpredict.

The predictor itself never raises: malformed history degrades to a
low-confidence random prediction. These exceptions cover the layers
around it (loading history files, ledger bookkeeping, configuration).

Usage:
    from colorpredict.exceptions import HistoryLoadError

    try:
        outcomes = load_history(path)
    except HistoryLoadError as e:
        print(f"Could not read history: {e}")
"""


class ColorPredictError(Exception):
    """
    Base exception for all colorpredict errors.

    All custom exceptions inherit from this, allowing:
        except ColorPredictError:
            # Catch any system error
    """
    pass


class HistoryLoadError(ColorPredictError):
    """
    A history file could not be read or parsed.

    Raised when:
    - The file does not exist or is unreadable
    - JSON/CSV content is malformed
    - The file has an unsupported extension
    """

    def __init__(self, path: str, message: str = None, original_error: Exception = None):
        self.path = path
        self.original_error = original_error
        msg = f"Error loading history from {path}"
        if message:
            msg += f": {message}"
        if original_error:
            msg += f" (caused by: {type(original_error).__name__}: {original_error})"
        super().__init__(msg)


class LedgerError(ColorPredictError):
    """
    Invalid operation on a prediction ledger.

    Raised when:
    - Settling a period with a result outside 0-9
    - Ledger rows loaded from storage are malformed
    """
    pass


class SchemaValidationError(ColorPredictError, ValueError):
    """Raw outcome rows are missing required fields."""
    pass


class ConfigError(ColorPredictError):
    """
    Configuration could not be loaded or is invalid.

    Raised when:
    - A config file path does not exist
    - The game variant is not one of the supported variants
    """

    def __init__(self, message: str, key: str = None):
        self.key = key
        msg = f"Config error: {message}"
        if key:
            msg += f" (key: {key})"
        super().__init__(msg)
