"""
Registry of appliance families and their cooking methods.

Cooking actions saved by older app versions reference methods by several
id styles: canonical ids (``air_fry``), oven program ids (``METHOD_AIR_FRY``)
and cooker firmware mode numbers (``0`` or ``"0"``). Lookup accepts all of
them, case-insensitively.
"""

from typing import Dict, List, Optional, Union

from ..models.appliance import ApplianceFamily, MethodSpec
from .oven import OVEN_METHODS
from .cooker import COOKER_METHODS

FAMILY_ALIASES: Dict[str, ApplianceFamily] = {
    "oven": ApplianceFamily.OVEN,
    "cq50": ApplianceFamily.OVEN,
    "minioven": ApplianceFamily.OVEN,
    "cooker": ApplianceFamily.COOKER,
    "rj40": ApplianceFamily.COOKER,
}

_METHODS: Dict[ApplianceFamily, List[MethodSpec]] = {
    ApplianceFamily.OVEN: OVEN_METHODS,
    ApplianceFamily.COOKER: COOKER_METHODS,
}


def _build_index(methods: List[MethodSpec]) -> Dict[str, MethodSpec]:
    index = {}
    for method in methods:
        index[method.id.lower()] = method
        for alias in method.aliases:
            index.setdefault(alias.lower(), method)
    return index


_INDEX: Dict[ApplianceFamily, Dict[str, MethodSpec]] = {
    family: _build_index(methods) for family, methods in _METHODS.items()
}


def resolve_family(family: Union[str, ApplianceFamily, None]) -> Optional[ApplianceFamily]:
    if isinstance(family, ApplianceFamily):
        return family
    if not family:
        return None
    return FAMILY_ALIASES.get(str(family).strip().lower())


def get_method(
    family: Union[str, ApplianceFamily, None],
    method_id: Union[str, int, None],
) -> Optional[MethodSpec]:
    """
    Look up a method schema.

    Returns None for an unknown family or method, never raises.
    """
    resolved = resolve_family(family)
    if resolved is None or method_id is None or isinstance(method_id, bool):
        return None
    return _INDEX[resolved].get(str(method_id).strip().lower())


def list_methods(family: Union[str, ApplianceFamily]) -> List[MethodSpec]:
    resolved = resolve_family(family)
    if resolved is None:
        return []
    return list(_METHODS[resolved])


__all__ = ["FAMILY_ALIASES", "resolve_family", "get_method", "list_methods"]
