import inspect
import importlib
from typing import Dict, Optional
import logging

from .util import to_snake

logger = logging.getLogger(__name__)


# ============================================================================
# GENERIC REFLECTION UTILITIES
# ============================================================================

def discover_classes(
    pkg_name: str,
    base_cls: type,
    exclude_abstract: bool = True,
    exclude_base: bool = True
) -> Dict[str, type]:
    """
    Discover classes extends base from pkg

    Args:
        pkg_name: package name (e.g. 'nodebuilder.emitters')
        base_cls: base class (e.g. Emitter)
        exclude_abstract: whether to exclude abstract classes
        exclude_base: whether to exclude base class itself

    Returns:
        dictionary {class name: class object}
    """
    discovered = {}

    module = importlib.import_module(pkg_name)

    for name, obj in inspect.getmembers(module, inspect.isclass):
        if exclude_base and obj == base_cls:
            continue

        if not issubclass(obj, base_cls):
            continue

        if exclude_abstract and inspect.isabstract(obj):
            continue

        discovered[name] = obj

    return discovered


def extract_emitter_info(cls_name: str) -> Optional[str]:
    """
    Extract artifact name from class name

    Args:
        cls_name: class name (e.g. 'LinuxServiceEmitter')

    Returns:
        artifact name (e.g. 'linux_service') or None
    """
    if not cls_name.endswith('Emitter'):
        return None

    base_name = cls_name[:-7]
    if not base_name:
        return None
    return to_snake(base_name)
