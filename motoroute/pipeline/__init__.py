"""Route building pipeline."""

from .route_pipeline import RouteBuildPipeline, RouteBuildResult

__all__ = ["RouteBuildPipeline", "RouteBuildResult"]
