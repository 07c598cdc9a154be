class PhpBeautifyError(Exception):
    """Base class for errors raised by phpbeautify itself."""


class ConfigError(PhpBeautifyError):
    """Settings could not be read or parsed."""


class FormatFailedError(PhpBeautifyError):
    """A formatting stage failed and the caller asked not to fall back."""

    def __init__(self, stage: str, message: str):
        super().__init__(f"{stage} failed: {message}")
        self.stage = stage


__all__ = ["PhpBeautifyError", "ConfigError", "FormatFailedError"]
