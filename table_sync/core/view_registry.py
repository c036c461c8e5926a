from __future__ import annotations

from typing import Any, Dict, List, Optional


class ViewRegistry:
    """
    Registry mapping a view id to the handle of the widget that renders it

    Purpose:
    - Lets the coordinator refresh a table without knowing how it fetches or draws rows
    - Owners of a widget call {@link register(view_id, handle)} once the widget exists

    Design Notes:
    - Stores a plain reference; the widget is owned by whoever created it
    - Re-registering an id replaces the previous handle (last one wins), no error is raised
    - Lookups never raise, an unknown id resolves to None
    """

    def __init__(self):
        self._handles: Dict[str, Any] = {}

    def register(self, view_id: str, handle: Any) -> None:
        """
        Store the handle for view_id, overwriting any earlier registration
        :param view_id: the id of the view
        :param handle: the widget handle ({@link BaseWidget} or anything with the same methods)
        """
        self._handles[view_id] = handle

    def resolve(self, view_id: str) -> Optional[Any]:
        """
        :param view_id: the id of the view
        :return: the registered handle, or None if the view never registered
        """
        return self._handles.get(view_id)

    def view_ids(self) -> List[str]:
        return list(self._handles.keys())

    def __contains__(self, view_id: object) -> bool:
        return view_id in self._handles

    def __len__(self) -> int:
        return len(self._handles)
