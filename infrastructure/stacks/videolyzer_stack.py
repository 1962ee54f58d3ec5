"""CDK stack for the video labeling pipeline."""

from typing import Any

import aws_cdk as cdk
from constructs import Construct

from infrastructure.cdk_constructs import VideoPipelineConstruct
from infrastructure.config import VideolyzerConfig


class VideolyzerStack(cdk.Stack):
  """Stack that labels uploaded videos with Rekognition."""

  def __init__(
    self,
    scope: Construct,
    id: str,
    *,
    videolyzer_config: VideolyzerConfig,
    **kwargs: Any,
  ) -> None:
    super().__init__(scope, id, **kwargs)

    self.pipeline = VideoPipelineConstruct(
      self,
      "Pipeline",
      bucket_name=videolyzer_config.bucket_name,
      table_name=videolyzer_config.table_name,
      video_suffix=videolyzer_config.video_suffix,
      removal_policy=videolyzer_config.removal_policy,
    )

    cdk.Tags.of(self).add("Project", "videolyzer")
