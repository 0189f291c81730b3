"""Localized display names for beacons.

The beacon file carries names in English; the map shows them in the crew's
language when a translation is known. Unknown names pass through unchanged.
"""

import logging
from pathlib import Path

import yaml

logger = logging.getLogger(__name__)


class BeaconNameTable:
    """String-to-string name table with pass-through on miss.

    Examples:
        >>> table = BeaconNameTable({"VNUKOVO": "Внуково"})
        >>> table.translate("VNUKOVO")
        'Внуково'
        >>> table.translate("UNKNOWN")
        'UNKNOWN'
    """

    def __init__(self, names: dict[str, str] | None = None) -> None:
        self._names = dict(names or {})

    @classmethod
    def load_from_yaml(cls, path: str | Path) -> "BeaconNameTable":
        """Load a ``{source name: localized name}`` mapping.

        A missing or malformed file yields an empty table and a warning.
        """
        path = Path(path)
        try:
            with path.open("r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.warning("Could not read beacon name table %s: %s", path, e)
            return cls()

        if not isinstance(data, dict):
            logger.warning("Beacon name table %s is not a mapping", path)
            return cls()

        logger.debug("Loaded %d beacon name translations", len(data))
        return cls({str(k): str(v) for k, v in data.items()})

    def translate(self, name: str) -> str:
        return self._names.get(name, name)

    def __len__(self) -> int:
        return len(self._names)
