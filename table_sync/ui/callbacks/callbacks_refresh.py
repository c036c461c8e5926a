from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Any, Callable, List, Optional, Sequence

import dash
from dash import ALL, Input, Output, State, no_update
from flask import jsonify, request

from table_sync.core.events import Topics
from table_sync.ui.ids import IDs

if TYPE_CHECKING:
    from table_sync.ui.config import AppConfig

logger = logging.getLogger(__name__)

# notifications other components may post for a view
EXTERNAL_TOPICS = {
    "item_created": Topics.Inbound.ITEM_CREATED,
    "item_updated": Topics.Inbound.ITEM_UPDATED,
    "item_deleted": Topics.Inbound.ITEM_DELETED,
    "refresh_requested": Topics.Inbound.REFRESH_REQUESTED,
}


class RefreshTicker:
    """
    Driven by the page's interval component.

    Every tick flushes debounced auto-refreshes. When auto-refresh is enabled,
    a "refresh requested" notification is also sent to every view once per
    configured interval.
    """

    def __init__(self, ctx: AppConfig, clock: Optional[Callable[[], float]] = None):
        self.ctx = ctx
        self._clock = clock or time.monotonic
        self._last_auto_refresh: Optional[float] = None

    def tick(self) -> List[str]:
        """
        :return: ids of the views asked to refresh on this tick (interval or debounce)
        """
        coordinator = self.ctx.coordinator
        auto = coordinator.config.auto_refresh
        now = self._clock()
        refreshed: List[str] = []

        if auto.enabled:
            if self._last_auto_refresh is None:
                self._last_auto_refresh = now
            elif now - self._last_auto_refresh >= auto.interval_seconds:
                self._last_auto_refresh = now
                for view in self.ctx.settings.views:
                    coordinator.notify(Topics.Inbound.REFRESH_REQUESTED, view.id)
                    refreshed.append(view.id)

        for view_id in coordinator.auto_refresh.flush(now):
            if view_id not in refreshed:
                refreshed.append(view_id)

        return refreshed


def unseen_revisions(
        ctx: AppConfig,
        tick_tokens: Sequence[Any],
        token_ids: Sequence[dict],
        refresh_tokens: Sequence[Any],
) -> list:
    """
    New tick token per view: the widget revision when the browser has not seen
    it through either token yet, no_update otherwise.
    """
    out = []
    for tick, token_id, refresh in zip(tick_tokens or [], token_ids or [], refresh_tokens or []):
        widget = ctx.widgets.get(token_id.get("view"))
        seen = max(tick or 0, refresh or 0)
        if widget is None or widget.revision == seen:
            out.append(no_update)
        else:
            out.append(widget.revision)
    return out


def register_refresh_callbacks(app: dash.Dash, ctx: AppConfig) -> None:
    ticker = RefreshTicker(ctx)

    # ---------------------------------------------------------
    # Interval tick: push any revision the browser has not seen yet
    # ---------------------------------------------------------
    @app.callback(
        Output({"type": IDs.Pattern.TICK_TOKEN, "view": ALL}, "data"),
        Input(IDs.Control.TICK_INTERVAL, "n_intervals"),
        State({"type": IDs.Pattern.TICK_TOKEN, "view": ALL}, "data"),
        State({"type": IDs.Pattern.TICK_TOKEN, "view": ALL}, "id"),
        State({"type": IDs.Pattern.REFRESH_TOKEN, "view": ALL}, "data"),
        prevent_initial_call=True,
    )
    def on_tick(_n_intervals, tick_tokens, token_ids, refresh_tokens):
        ticker.tick()
        return unseen_revisions(ctx, tick_tokens, token_ids, refresh_tokens)

    # ---------------------------------------------------------
    # External "data changed" notifications
    # ---------------------------------------------------------
    @app.server.route("/api/views/<view_id>/events", methods=["POST"])
    def post_view_event(view_id: str):
        payload = request.get_json(silent=True)
        if payload is None:
            payload = {}
        if not isinstance(payload, dict):
            return jsonify({"error": "Body must be a JSON object"}), 400
        event = payload.get("event", "refresh_requested")
        if not isinstance(event, str):
            return jsonify({"error": "'event' must be a string"}), 400

        topic = EXTERNAL_TOPICS.get(event)
        if topic is None:
            # custom topics only reach views that registered for them
            known = any(
                event in entry.events
                for entry in (
                    ctx.coordinator.auto_refresh.get_config(v)
                    for v in ctx.coordinator.auto_refresh.registered_views()
                )
            )
            if not known:
                return jsonify({"error": f"Unknown event '{event}'"}), 400
            topic = event

        logger.info("External view notification", extra={"view_id": view_id, "event": event})
        ctx.coordinator.notify(topic, view_id)
        return jsonify({"view_id": view_id, "event": event}), 202
