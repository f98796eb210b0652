"""
Errors raised by the gallery access layer.
"""


class ConfigurationError(ValueError):
    """
    A gallery setting is missing without a default or holds a value that
    cannot be interpreted. Not retriable; visibility is never assumed.
    """
    
    def __init__(self, key: str, message: str):
        self.key = key
        super().__init__(f"{key}: {message}")
