# -*- coding: utf-8 -*-
"""RaceFuel: nutrition planning API for endurance events."""

__version__ = "0.1.0"
