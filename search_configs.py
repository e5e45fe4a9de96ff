import numbers
from typing import Optional

from bn_errors import InvalidConfiguration

PARENTS = "parents"
CHILDREN = "children"
BOUNDED_ROLES = (PARENTS, CHILDREN)

#dataset-specific search settings for the course data files
SMALL = dict(
    bounded=PARENTS,
    max_degree=2,
    min_information_gain=0.0,
)

MEDIUM = dict(
    bounded=PARENTS,
    max_degree=3,
    min_information_gain=0.0,
)

LARGE = dict(
    bounded=PARENTS,
    max_degree=3,
    min_information_gain=0.01,  #many weak pairs, keep only informative ones
)

DEFAULT = MEDIUM

PRESETS = {"small": SMALL, "medium": MEDIUM, "large": LARGE}


def validate_config(max_degree, bounded: str = PARENTS,
                    min_information_gain: Optional[float] = 0.0):
    """Raise InvalidConfiguration unless the settings describe a runnable search.

    A cap of 0 is allowed and simply admits no edge.
    """
    if max_degree is None:
        raise InvalidConfiguration(f"max number of {bounded} is not set")
    if isinstance(max_degree, bool) or not isinstance(max_degree, numbers.Integral):
        raise InvalidConfiguration(
            f"max number of {bounded} must be an integer, got {max_degree!r}")
    if max_degree < 0:
        raise InvalidConfiguration(f"max number of {bounded} must be >= 0, got {max_degree}")
    if bounded not in BOUNDED_ROLES:
        raise InvalidConfiguration(
            f"bounded must be one of {BOUNDED_ROLES}, got {bounded!r}")
    if min_information_gain is not None and min_information_gain < 0:
        raise InvalidConfiguration(
            f"min_information_gain must be >= 0, got {min_information_gain}")
