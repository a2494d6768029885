"""Exceptions raised by structid."""


class StructIdError(ValueError):
    """Base exception for structid errors."""


class InvalidOptionsError(StructIdError):
    """Raised when length or grouping options contradict each other."""


class IncompatibleAlgorithmError(StructIdError):
    """Raised when a checksum algorithm is paired with the wrong charset."""

    def __init__(self, algorithm: str, required_charset: str) -> None:
        self.algorithm = algorithm
        self.required_charset = required_charset
        super().__init__(f'algorithm "{algorithm}" requires charset "{required_charset}"')


class PatternError(StructIdError):
    """Raised when a pattern cannot host the requested checksum."""


class ChecksumInputError(StructIdError):
    """Raised when a checksum routine receives a character outside its alphabet."""


class FormatLengthError(StructIdError):
    """Raised when an identifier does not have the length a formatter expects."""

    def __init__(self, expected: int, actual: int) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"format_id: expected {expected} characters, got {actual}")


class ProfileNotFoundError(StructIdError):
    """Raised when a named profile is missing from the loaded config."""

    def __init__(self, name: str, available: list[str]) -> None:
        self.name = name
        self.available = available
        known = ", ".join(available) if available else "none defined"
        super().__init__(f"Unknown profile '{name}' (available: {known})")
