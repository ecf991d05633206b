"""
Some utils for Node Builder
"""

import re
import time
import logging
from contextlib import contextmanager

from ..exceptions import UnsupportedFeatureError

# ----------------------
#
#  Name Converting
#
# ----------------------

cpn = re.compile(r'(?<!^)(?=[A-Z])')
cp_pattern = re.compile(r'^[a-zA-Z][a-zA-Z0-9]*$')

def to_snake(name: str) -> str:
    """
    Convert camalCase or PascalCase to snake_case
    """
    if not cp_pattern.fullmatch(name):
        raise UnsupportedFeatureError(f"Only PascalCase and camelCase can use to_snake, but '{name}' got.")
    return cpn.sub('_', name).lower()


def shortcut_of(package_name: str) -> str:
    """
    Strip the npm scope from a package name: '@org/app' -> 'app'
    """
    return package_name.split('/', 1)[1] if '/' in package_name else package_name

# ----------------------
#
#  Timing
#
# ----------------------

@contextmanager
def timed(logger: logging.Logger, label: str):
    """Log `label` on entry and the elapsed time if the block finishes without raising."""
    logger.info(label)
    start = time.monotonic()
    yield
    logger.info(f"Finished in {time.monotonic() - start:.3f}s")
