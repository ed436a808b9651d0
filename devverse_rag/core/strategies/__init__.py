"""Retry, classification and selection strategies."""
from .error_classification import ErrorKind, classify_error, classify_exception
from .model_selection import is_chat_model, select_chat_models

__all__ = [
    "ErrorKind",
    "classify_error",
    "classify_exception",
    "is_chat_model",
    "select_chat_models",
]
