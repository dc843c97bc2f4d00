"""Example objects built on ``basekit.base.Base``."""

from __future__ import annotations

from typing import Any

import basekit.base
import basekit.config

Field = basekit.base.Field


@basekit.config.configurable("point")
class Point(basekit.base.Base):
    FIELDS = (Field("x"), Field("y"))


@basekit.config.configurable("circle")
class Circle(Point):
    FIELDS = (Field("radius", required=False, default=1),)

    def init(self, config: dict[str, Any]) -> Circle:
        super().init(config)
        radius = self.radius
        if isinstance(radius, bool) or not isinstance(radius, (int, float)) or radius <= 0:
            self.error("Radius must be a positive number, got ", repr(radius))
        return self
