"""Color scheme model, repository and resolution."""

from jbtheme.scheme.errors import CyclicInheritanceError, SchemeError, SchemeNotFoundError, SchemeParseError
from jbtheme.scheme.model import Attribute, ColorToken, Scheme, TokenName
from jbtheme.scheme.repository import SchemeRepository
from jbtheme.scheme.resolver import SchemeResolver, merge_schemes
from jbtheme.scheme.xml_loader import parse_schemes

__all__ = [
    "Attribute",
    "ColorToken",
    "CyclicInheritanceError",
    "Scheme",
    "SchemeError",
    "SchemeNotFoundError",
    "SchemeParseError",
    "SchemeRepository",
    "SchemeResolver",
    "TokenName",
    "merge_schemes",
    "parse_schemes",
]
