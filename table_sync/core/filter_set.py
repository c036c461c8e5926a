from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

# field name -> non-empty value, in control order
FilterSet = Dict[str, str]


@dataclass
class FilterControl:
    """
    One value-bearing input inside a filter panel.

    :param name: the field name the value is stored under
    :param value: current visible value; None, str, number or a list for multi-selects
    """
    name: str
    value: Any = None

    def text_value(self) -> str:
        """
        Normalise the visible value to the string stored in a FilterSet.
        Empty strings, None and empty lists all become "".
        """
        value = self.value
        if value is None:
            return ""
        if isinstance(value, (list, tuple)):
            return ",".join(str(v) for v in value if v is not None and str(v) != "")
        return str(value)

    def clear(self) -> None:
        # an unset control (None) stays unset
        if self.value is None:
            return
        self.value = [] if isinstance(self.value, (list, tuple)) else ""


@dataclass
class FilterContainer:
    """
    Structural model of a rendered filter panel.

    Fields:

    - container_id: id of the panel in the page
    - view_id: marker naming the view this panel filters (None if the page forgot it)
    - controls: inputs in the order they appear in the panel
    """
    container_id: str
    view_id: Optional[str] = None
    controls: List[FilterControl] = field(default_factory=list)

    def values(self) -> Dict[str, Any]:
        return {c.name: c.value for c in self.controls}


def resolve_view_id(container: Optional[FilterContainer]) -> Optional[str]:
    """Return the view id marked on the container, or None when absent/blank."""
    if container is None:
        return None
    view_id = container.view_id
    if not view_id or not str(view_id).strip():
        return None
    return str(view_id)
