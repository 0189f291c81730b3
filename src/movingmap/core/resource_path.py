"""Resource path resolution.

Resolves the bundled config and data directories relative to the project
root, and the aircraft installation root that holds the beacon database.

Typical usage:
    from movingmap.core.resource_path import get_beacon_db_path, get_config_path

    config_path = get_config_path("movingmap.yaml")
    beacon_file = get_beacon_db_path("rsbn.dat")
"""

import os
from pathlib import Path

AIRCRAFT_PATH_ENV = "MOVINGMAP_AIRCRAFT_PATH"


def get_project_root() -> Path:
    """Get the project root directory (parent of ``src/``)."""
    return Path(__file__).parent.parent.parent.parent


def get_resource_path(relative_path: str) -> Path:
    """Get absolute path to a resource below the project root.

    Examples:
        >>> str(get_resource_path("config/logging.yaml"))
        '/home/user/dev/movingmap/config/logging.yaml'
    """
    return get_project_root() / relative_path


def get_config_path(config_file: str) -> Path:
    """Get path to a configuration file in ``config/``."""
    return get_resource_path(f"config/{config_file}")


def get_data_path(data_file: str) -> Path:
    """Get path to a data file or directory in ``data/``."""
    return get_resource_path(f"data/{data_file}")


def get_aircraft_path() -> Path:
    """Get the aircraft installation root.

    Returns:
        The directory named by ``MOVINGMAP_AIRCRAFT_PATH`` when set,
        otherwise the ``data/`` directory of the project.
    """
    override = os.environ.get(AIRCRAFT_PATH_ENV)
    if override:
        return Path(override)
    return get_resource_path("data")


def get_beacon_db_path(filename: str = "rsbn.dat") -> Path:
    """Get the beacon database path (aircraft root + fixed filename).

    Examples:
        >>> get_beacon_db_path("rsbn.dat").name
        'rsbn.dat'
    """
    return get_aircraft_path() / filename
