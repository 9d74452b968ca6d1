from .name_resolver import levenshtein_distance, resolve, resolve_or_raise, resolve_package_name, suggest

__all__ = [
    'levenshtein_distance',
    'resolve',
    'resolve_or_raise',
    'resolve_package_name',
    'suggest',
]
