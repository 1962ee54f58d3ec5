"""CDK constructs for the serverless services."""

from .notifier import NotifierConstruct
from .video_pipeline import VideoPipelineConstruct

__all__ = [
  "NotifierConstruct",
  "VideoPipelineConstruct",
]
