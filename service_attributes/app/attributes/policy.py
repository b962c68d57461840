"""
Attribute policy for the attribute provider.
"""

from typing import Dict, List, Mapping, Sequence
import sys
import os

# Add shared directory to path
sys.path.append(os.path.join(os.path.dirname(__file__), '..', '..', '..'))

from shared.logging import get_logger
from ..errors import ConfigError


class AttributePolicy:
    """Decides which attributes are served and what they resolve to."""

    def __init__(self, attributes: Mapping[str, str]):
        self._attributes: Dict[str, str] = dict(attributes)
        self.logger = get_logger("attributes.policy")

    @property
    def supported(self) -> List[str]:
        """Names of all attributes this provider can serve."""
        return sorted(self._attributes)

    def verify(self, requested: Sequence[str]) -> None:
        """Raise ConfigError if any requested attribute is unsupported."""
        unsupported = [name for name in requested if name not in self._attributes]
        if unsupported:
            self.logger.warning("Unsupported attributes requested", unsupported=unsupported)
            raise ConfigError(
                "Unsupported attributes requested",
                details={"unsupported": unsupported}
            )

    def map(self, requested: Sequence[str]) -> Dict[str, str]:
        """Resolve requested attributes to their values.

        Resolution keeps the request order; a duplicate name resolves once.
        """
        self.verify(requested)
        return {name: self._attributes[name] for name in requested}
