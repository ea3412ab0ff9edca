"""Exceptions raised while loading and resolving color schemes."""


class SchemeError(Exception):
    """Base class for scheme loading and resolution failures."""


class SchemeNotFoundError(SchemeError, KeyError):
    """Raised when a scheme name has no matching record."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown color scheme: {name!r}")
        self.name = name

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return str(self.args[0])


class CyclicInheritanceError(SchemeError):
    """Raised when following parent references revisits a scheme."""

    def __init__(self, chain: list[str]) -> None:
        super().__init__(f"Cyclic scheme inheritance: {' -> '.join(chain)}")
        self.chain = tuple(chain)


class SchemeParseError(SchemeError):
    """Raised when scheme input cannot be turned into scheme records."""
