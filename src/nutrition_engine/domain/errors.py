"""Error types raised by the engine."""


class EngineError(Exception):
    """Base error for the measurement and energy engine."""


class InvalidInputError(EngineError, ValueError):
    """Raised when a mandatory numeric input is out of range."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(f"{field}: {message}")
        self.field = field


class UnknownProtocolError(EngineError, KeyError):
    """Raised when an energy protocol id is not registered."""

    def __init__(self, protocol_id: str) -> None:
        super().__init__(protocol_id)
        self.protocol_id = protocol_id

    def __str__(self) -> str:
        return f"Unknown energy protocol: {self.protocol_id!r}"
