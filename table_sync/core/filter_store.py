from __future__ import annotations

from typing import Dict, List, Optional

from .filter_set import FilterContainer, FilterSet


class FilterStore:
    """
    Last-applied filters per view.

    A view with nothing stored reads as the empty FilterSet. Stored sets are
    replaced wholesale on apply/reset and never merged with a previous one.
    """

    def __init__(self):
        self._filters: Dict[str, FilterSet] = {}

    @staticmethod
    def capture(container: FilterContainer) -> FilterSet:
        """
        Read the current values of every control in the container.

        Controls with an empty value are left out. Order follows the order of
        the controls in the container. Neither the container nor the store is
        modified.
        """
        captured: FilterSet = {}
        for control in container.controls:
            if not control.name:
                continue
            value = control.text_value()
            if value:
                captured[control.name] = value
        return captured

    def apply(self, view_id: str, filter_set: FilterSet) -> None:
        self._filters[view_id] = {k: v for k, v in filter_set.items() if v}

    def reset(self, view_id: str, container: Optional[FilterContainer] = None) -> None:
        """
        Store the empty set for view_id and clear the visible inputs of the
        associated container, if one is given.
        """
        self._filters[view_id] = {}
        if container is not None:
            for control in container.controls:
                control.clear()

    def get(self, view_id: str) -> FilterSet:
        return dict(self._filters.get(view_id, {}))

    def view_ids(self) -> List[str]:
        return list(self._filters.keys())
