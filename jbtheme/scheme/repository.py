"""Read-only index of parsed color schemes."""

from collections.abc import Iterable, Iterator

from jbtheme.logger import get_logger
from jbtheme.scheme.errors import SchemeNotFoundError
from jbtheme.scheme.model import Scheme

logger = get_logger(__name__)


class SchemeRepository:
    """Schemes keyed by name.

    The repository is populated once and exposes no mutation API, so it can be
    shared between concurrent resolutions.
    """

    def __init__(self, schemes: Iterable[Scheme]) -> None:
        """Index the given schemes.

        Args:
            schemes: Parsed scheme records. A later record with an already
                seen name replaces the earlier one.
        """
        self._schemes: dict[str, Scheme] = {}
        for scheme in schemes:
            if scheme.name in self._schemes:
                logger.warning(f"Duplicate color scheme {scheme.name!r}, keeping the last definition")
            self._schemes[scheme.name] = scheme
        logger.debug(f"Indexed {len(self._schemes)} color schemes")

    def get(self, name: str) -> Scheme:
        """Return the scheme with the given name.

        Args:
            name: Scheme name.

        Returns:
            The stored scheme.

        Raises:
            SchemeNotFoundError: If no scheme has that name.
        """
        try:
            return self._schemes[name]
        except KeyError:
            raise SchemeNotFoundError(name) from None

    def find(self, name: str) -> Scheme | None:
        """Return the scheme with the given name, or None."""
        return self._schemes.get(name)

    @property
    def names(self) -> tuple[str, ...]:
        """Scheme names in source order."""
        return tuple(self._schemes)

    def __contains__(self, name: object) -> bool:
        return name in self._schemes

    def __iter__(self) -> Iterator[Scheme]:
        return iter(self._schemes.values())

    def __len__(self) -> int:
        return len(self._schemes)
