"""Resolve schemes against their parents.

A child scheme only lists what it changes. Merging is field-level: a child
token that sets only ``value`` keeps the parent's accessibility variants, and a
child attribute that sets only FOREGROUND keeps the parent's FONT_TYPE.
"""

from collections.abc import Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor

from jbtheme.logger import get_logger
from jbtheme.scheme.errors import CyclicInheritanceError
from jbtheme.scheme.model import Attribute, ColorToken, Scheme
from jbtheme.scheme.repository import SchemeRepository

logger = get_logger(__name__)


def _pick(override: str | None, inherited: str | None) -> str | None:
    """Return the override when it is a non-empty string, else the inherited value."""
    return override if override else inherited


def merge_token(parent: ColorToken, child: ColorToken) -> ColorToken:
    """Patch the fields the child provides onto the parent token.

    Args:
        parent: Inherited token.
        child: Overriding token with the same name.

    Returns:
        A new token carrying the child's name.
    """
    return ColorToken(
        name=child.name,
        value=_pick(child.value, parent.value),
        variant_a=_pick(child.variant_a, parent.variant_a),
        variant_b=_pick(child.variant_b, parent.variant_b),
    )


def merge_tokens(parent: Iterable[ColorToken], child: Iterable[ColorToken]) -> tuple[ColorToken, ...]:
    """Merge two token sets matched by name.

    Args:
        parent: Inherited tokens, used as the base.
        child: Overriding tokens. Unknown names are appended.

    Returns:
        The merged tokens, parent order first.
    """
    merged: dict[str, ColorToken] = {token.name: token for token in parent}
    for token in child:
        base = merged.get(token.name)
        merged[token.name] = token if base is None else merge_token(base, token)
    return tuple(merged.values())


def merge_attributes(parent: Iterable[Attribute], child: Iterable[Attribute]) -> tuple[Attribute, ...]:
    """Merge two attribute sets matched by name.

    Args:
        parent: Inherited attributes, used as the base.
        child: Overriding attributes. Unknown names are appended unchanged.

    Returns:
        The merged attributes, parent order first.
    """
    merged: dict[str, Attribute] = {attribute.name: attribute for attribute in parent}
    for attribute in child:
        base = merged.get(attribute.name)
        if base is None:
            merged[attribute.name] = attribute
        else:
            merged[attribute.name] = Attribute(
                name=attribute.name,
                tokens=merge_tokens(base.tokens, attribute.tokens),
            )
    return tuple(merged.values())


def merge_schemes(parent: Scheme, child: Scheme) -> Scheme:
    """Apply a child scheme's overrides on top of its parent.

    Args:
        parent: The inherited scheme.
        child: The scheme being resolved.

    Returns:
        A new scheme with the child's name and parent reference and the merged
        colors and attributes. Neither input is modified.
    """
    return Scheme(
        name=child.name,
        parent_name=child.parent_name,
        colors=merge_tokens(parent.colors, child.colors),
        attributes=merge_attributes(parent.attributes, child.attributes),
    )


class SchemeResolver:
    """Produce effective schemes from a repository.

    By default only the direct parent is merged in; a grandparent is not
    consulted. Pass ``full_chain=True`` to follow parent references up to a
    root scheme.
    """

    def __init__(self, repository: SchemeRepository, full_chain: bool = False) -> None:
        """Initialize the resolver.

        Args:
            repository: Schemes to resolve against.
            full_chain: Merge the whole ancestor chain instead of one level.
        """
        self._repository = repository
        self._full_chain = full_chain

    @property
    def full_chain(self) -> bool:
        """Whether the whole ancestor chain is merged."""
        return self._full_chain

    def resolve(self, name: str) -> Scheme:
        """Return the effective scheme for a name.

        A scheme whose parent is missing from the repository is returned as-is.

        Args:
            name: Scheme name.

        Returns:
            The merged scheme. Schemes are immutable, so a scheme without a
            parent is returned without copying.

        Raises:
            SchemeNotFoundError: If the name is unknown.
            CyclicInheritanceError: In full-chain mode, if the parent
                references loop.
        """
        scheme = self._repository.get(name)
        if scheme.parent_name is None:
            return scheme

        if self._full_chain:
            return self._resolve_chain(scheme)

        parent = self._repository.find(scheme.parent_name)
        if parent is None:
            logger.debug(f"Scheme {name!r} has unknown parent {scheme.parent_name!r}, using it as-is")
            return scheme

        logger.debug(f"Merging scheme {name!r} with parent {parent.name!r}")
        return merge_schemes(parent, scheme)

    def _resolve_chain(self, scheme: Scheme) -> Scheme:
        """Fold the ancestor chain of a scheme, root first."""
        chain = [scheme]
        seen = [scheme.name]
        current = scheme
        while current.parent_name is not None:
            if current.parent_name in seen:
                raise CyclicInheritanceError([*seen, current.parent_name])
            parent = self._repository.find(current.parent_name)
            if parent is None:
                logger.debug(f"Scheme {current.name!r} has unknown parent {current.parent_name!r}, stopping there")
                break
            chain.append(parent)
            seen.append(parent.name)
            current = parent

        logger.debug(f"Merging scheme chain {' <- '.join(reversed(seen))}")
        result = chain[-1]
        for child in reversed(chain[:-1]):
            result = merge_schemes(result, child)
        return result

    def resolve_many(self, names: Sequence[str], max_workers: int | None = None) -> dict[str, Scheme]:
        """Resolve several schemes in parallel.

        Args:
            names: Scheme names, resolved independently.
            max_workers: Thread pool size (defaults to the executor's choice).

        Returns:
            Mapping of name to effective scheme, in input order.

        Raises:
            SchemeNotFoundError: If any name is unknown.
            CyclicInheritanceError: In full-chain mode, if any chain loops.
        """
        if not names:
            return {}
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            return dict(zip(names, executor.map(self.resolve, names), strict=True))
