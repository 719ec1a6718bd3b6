"""Resource filtering modules for selecting which resources get processed.

The Filter combines three independent rule sets:
- Include: resource types allowed (empty means everything)
- Exclude: resource types denied (empty means nothing)
- Targets: specific "<type>.<id>" resources to process
"""

from cognita.filters.filter import TARGET_SEPARATOR, Filter

__all__ = ["Filter", "TARGET_SEPARATOR"]
