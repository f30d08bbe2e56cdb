"""Exception types raised by huekit.

All of them derive from ``ValueError`` so callers that only care about bad
input can keep catching ``ValueError``.
"""


class ColorFormatError(ValueError):
    """Raised when a color string cannot be parsed."""

    def __init__(self, value: str, reason: str | None = None) -> None:
        self.value = value
        self.reason = reason or (
            "Supported formats: #RGB, #RRGGBB, RRGGBB, rgb(R, G, B)"
        )
        super().__init__(f"Invalid color format: '{value}'. {self.reason}")


class GradientInputError(ValueError):
    """Raised when a gradient collection is requested from unusable colors."""

    def __init__(self, errors: list[str]) -> None:
        self.errors = list(errors)
        super().__init__("; ".join(self.errors))


class DecodeError(ValueError):
    """Raised when an image cannot be turned into pixel data."""

    def __init__(self, source: str, reason: str) -> None:
        self.source = source
        self.reason = reason
        super().__init__(f"Could not decode image '{source}': {reason}")
