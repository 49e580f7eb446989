from __future__ import annotations

import logging

import pytest

from common import settings, setup_default_logging


@pytest.mark.smoke
def test_defaults_without_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "INK_STROKE_BASE_WIDTH",
        "INK_DEGENERATE_EPS",
        "INK_SIMPLIFY",
        "INK_INCREMENTAL_RIBBON",
        "INK_USE_NUMBA",
        "INK_TIMING_LOG",
    ):
        monkeypatch.delenv(name, raising=False)
    settings.reload_from_env()
    s = settings.get()
    assert s.STROKE_BASE_WIDTH == 16.0
    assert s.DEGENERATE_EPS == 1e-6
    assert s.SIMPLIFY_ENABLED is False
    assert s.INCREMENTAL_RIBBON is True
    assert s.USE_NUMBA is True
    assert s.TIMING_LOG is False


def test_environment_overrides(ink_env) -> None:
    ink_env(
        INK_STROKE_BASE_WIDTH="24",
        INK_DEGENERATE_EPS="0.01",
        INK_SIMPLIFY="on",
        INK_USE_NUMBA="0",
    )
    s = settings.get()
    assert s.STROKE_BASE_WIDTH == 24.0
    assert s.DEGENERATE_EPS == 0.01
    assert s.SIMPLIFY_ENABLED is True
    assert s.USE_NUMBA is False


def test_negative_width_is_clamped(ink_env) -> None:
    ink_env(INK_STROKE_BASE_WIDTH="-5")
    assert settings.get().STROKE_BASE_WIDTH == 0.0


def test_setup_default_logging_is_idempotent() -> None:
    root = logging.getLogger()
    setup_default_logging(logging.INFO)
    n = len(root.handlers)
    setup_default_logging(logging.INFO)
    assert len(root.handlers) == n
