"""CDK stacks for the serverless services."""

from .notifon_stack import NotifonStack
from .videolyzer_stack import VideolyzerStack

__all__ = ["NotifonStack", "VideolyzerStack"]
