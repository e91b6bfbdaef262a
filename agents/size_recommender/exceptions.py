"""
Exceptions raised by the size recommender.

Usage:
    from agents.size_recommender.exceptions import InvalidRequestError

    try:
        data = validate_payload(body)
    except InvalidRequestError as e:
        return error_response(400, str(e))
"""

from typing import Optional


class SizeRecommenderError(Exception):
    """Base exception for the size recommender."""
    pass


class InvalidRequestError(SizeRecommenderError):
    """
    Request body rejected before classification.

    Raised when:
    - a required field is missing, null or an empty string
    - a numeric field does not parse to a finite number
    - historicalRecord is neither 'win' nor 'loss'
    """

    def __init__(self, message: str, field: Optional[str] = None):
        self.field = field
        super().__init__(message)


class ConfigurationError(SizeRecommenderError):
    """Invalid recorder or service configuration."""

    def __init__(self, setting: str, message: str):
        self.setting = setting
        super().__init__(f"Configuration error ({setting}): {message}")
