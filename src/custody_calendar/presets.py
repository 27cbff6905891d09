"""
presets.py

Bulk rewrite of holiday assignments from a named preset profile.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import List, Sequence

from .catalog import get_preset
from .models import HolidayUserConfig

LOGGER = logging.getLogger(__name__)


def apply_preset(configs: Sequence[HolidayUserConfig], preset_type: str) -> List[HolidayUserConfig]:
    """
    Replace the assignment of every config the preset covers.

    Configs the preset does not mention pass through unchanged and `enabled` flags are
    never touched, so applying the same preset twice gives the same result as once.
    An unknown preset type leaves the configs unchanged.

    Parameters
    ----------
    configs: Sequence[HolidayUserConfig]
        Current configuration; not modified.
    preset_type: str
        'traditional', '50-50-split' or 'one-parent-all'.

    Returns
    -------
    List[HolidayUserConfig]
        A new configuration list.
    """
    preset = get_preset(preset_type)
    if preset is None:
        LOGGER.warning("Unknown holiday preset %r, configuration left unchanged", preset_type)
        return list(configs)

    return [
        replace(c, assignment=preset.assignments[c.holiday_id]) if c.holiday_id in preset.assignments else c
        for c in configs
    ]
