"""Clinic agenda layout package.

Public API:
  - import from `agenda.api` (preferred) or `import agenda` (re-export)
"""

from __future__ import annotations

from .api import *  # noqa: F401,F403
from . import api as _api

__all__ = list(_api.__all__)

from .api import (
    GridConfig,
    LayoutedEvent,
    compute_event_layout,
    layout_days,
    layout_week,
)
