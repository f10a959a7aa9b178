"""FastAPI application that exposes a local API over the activity history."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Optional

from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.middleware.cors import CORSMiddleware

from .catalog import CATALOG
from .config import SortKey, SortOrder, SortSettings, TimeRange
from .history import HistoryError, load_history
from .models import CompletedActivity
from .paths import get_history_path, get_preferences_path
from .preferences import (
    Preferences,
    PreferencesError,
    load_preferences,
    save_preferences,
)
from .reporting import count_clears, count_daily_clears
from .resets import daily_reset, weekly_reset
from .view import activity_payload, build_view

logger = logging.getLogger(__name__)


def create_app(
    *,
    history_path: Optional[Path] = None,
    preferences_path: Optional[Path] = None,
) -> FastAPI:
    """Instantiate the FastAPI application."""
    resolved_history_path = Path(history_path or get_history_path())
    resolved_preferences_path = Path(preferences_path or get_preferences_path())

    app = FastAPI(title="Clearboard", version="0.1.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.history_path = resolved_history_path
    app.state.preferences_path = resolved_preferences_path

    @app.get("/api/status")
    def status(request: Request) -> Dict[str, Any]:
        activities = _load_history(request)
        return {
            "history_path": str(request.app.state.history_path),
            "preferences_path": str(request.app.state.preferences_path),
            "activity_count": len(activities),
        }

    @app.get("/api/activities")
    def activities(
        request: Request,
        sort_by: Optional[str] = Query(
            default=None, description="One of: time, duration, activity."
        ),
        order: Optional[str] = Query(default=None, description="One of: asc, desc."),
        time_range: Optional[str] = Query(
            default=None, description="One of: all, today, week, month."
        ),
    ) -> Dict[str, Any]:
        history = _load_history(request)
        preferences = _load_preferences(request)
        sorting = _sort_settings(preferences, sort_by, order, time_range)
        view = build_view(history, preferences.to_filter_settings(), sorting)
        return {
            "sorting": {
                "sort_by": sorting.sort_by.value,
                "order": sorting.sort_order.value,
                "time_range": sorting.time_range.value,
            },
            "total": len(history),
            "count": len(view),
            "activities": [activity_payload(activity) for activity in view],
        }

    @app.get("/api/daily-clears")
    def daily_clears(request: Request) -> Dict[str, Any]:
        history = _load_history(request)
        return {
            "daily_clears": count_daily_clears(history),
            "total_clears": count_clears(history),
            "daily_reset": daily_reset().isoformat(),
            "weekly_reset": weekly_reset().isoformat(),
        }

    @app.get("/api/catalog")
    def catalog() -> Dict[str, Any]:
        return {
            "raids": [
                {"hash": entry.hash, "name": entry.name, "all_hashes": list(entry.all_hashes)}
                for entry in CATALOG.unique_raids()
            ],
            "dungeons": [
                {"hash": entry.hash, "name": entry.name}
                for entry in CATALOG.unique_dungeons()
            ],
        }

    @app.get("/api/preferences")
    def get_preferences(request: Request) -> Dict[str, Any]:
        return _load_preferences(request).to_document()

    @app.put("/api/preferences")
    def put_preferences(payload: Preferences, request: Request) -> Dict[str, Any]:
        save_preferences(request.app.state.preferences_path, payload)
        return payload.to_document()

    return app


def _load_history(request: Request) -> list[CompletedActivity]:
    try:
        return load_history(request.app.state.history_path)
    except HistoryError as exc:
        logger.error("%s", exc)
        raise HTTPException(status_code=500, detail="Activity history is unreadable") from exc


def _load_preferences(request: Request) -> Preferences:
    try:
        return load_preferences(request.app.state.preferences_path)
    except PreferencesError as exc:
        logger.error("%s", exc)
        raise HTTPException(status_code=500, detail="Preferences are unreadable") from exc


def _sort_settings(
    preferences: Preferences,
    sort_by: Optional[str],
    order: Optional[str],
    time_range: Optional[str],
) -> SortSettings:
    stored = preferences.to_sort_settings()
    try:
        return SortSettings(
            sort_by=SortKey(sort_by) if sort_by else stored.sort_by,
            sort_order=SortOrder(order) if order else stored.sort_order,
            time_range=TimeRange(time_range) if time_range else stored.time_range,
        )
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
