"""Unit tests for the ``python -m newsfeed`` entry point."""

from __future__ import annotations

import runpy

import uvicorn

from newsfeed.main import settings


def test_module_entry_point_starts_uvicorn_once(monkeypatch):
    calls: list[tuple[tuple, dict]] = []
    monkeypatch.setattr(uvicorn, "run", lambda *args, **kwargs: calls.append((args, kwargs)))

    runpy.run_module("newsfeed", run_name="__main__")

    assert len(calls) == 1
    args, kwargs = calls[0]
    assert args == ("newsfeed.main:app",)
    assert kwargs["host"] == settings.app_host
    assert kwargs["port"] == settings.app_port
