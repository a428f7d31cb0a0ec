"""Chart projections and figure builders."""

from .forecast_charts import make_forecast_chart, make_overlay_chart
from .projection import forecast_frame, forecast_range, overlay_frame, project

__all__ = ["forecast_frame", "forecast_range", "make_forecast_chart", "make_overlay_chart", "overlay_frame", "project"]
