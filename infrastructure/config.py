"""Configuration loader for the serverless services."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from aws_cdk import RemovalPolicy

AUTOSCALING_DETAIL_TYPES = [
  "EC2 Instance Launch Successful",
  "EC2 Instance Launch Unsuccessful",
  "EC2 Instance Terminate Successful",
  "EC2 Instance Terminate Unsuccessful",
]


@dataclass
class NotifierConfig:
  """Configuration for the Auto Scaling Slack notifier."""

  enabled: bool = False
  slack_webhook_url: str = ""
  autoscaling_group_name: str | None = None  # None listens to every group
  region: str = "us-east-1"


@dataclass
class VideolyzerConfig:
  """Configuration for the video labeling pipeline."""

  enabled: bool = False
  bucket_name: str | None = None  # Generated by CloudFormation when unset
  table_name: str = "videolyzer-videos"
  video_suffix: str | None = None  # e.g. ".mp4"; None accepts every upload
  removal_policy: RemovalPolicy = RemovalPolicy.RETAIN
  region: str = "us-east-1"


@dataclass
class Config:
  """Service configuration."""

  notifier: NotifierConfig = field(default_factory=NotifierConfig)
  videolyzer: VideolyzerConfig = field(default_factory=VideolyzerConfig)

  @classmethod
  def from_yaml(cls, path: Path | str = "services.yaml") -> "Config":
    """Load configuration from YAML file."""
    with open(path) as f:
      data = yaml.safe_load(f) or {}

    defaults: dict[str, Any] = data.get("defaults", {})

    # Merge defaults with service-specific config
    notifier_data = {**defaults, **data.get("notifier", {})}
    notifier = NotifierConfig(
      enabled=notifier_data.get("enabled", False),
      slack_webhook_url=notifier_data.get("slack_webhook_url", ""),
      autoscaling_group_name=notifier_data.get("autoscaling_group_name"),
      region=notifier_data.get("region", "us-east-1"),
    )

    videolyzer_data = {**defaults, **data.get("videolyzer", {})}
    videolyzer = VideolyzerConfig(
      enabled=videolyzer_data.get("enabled", False),
      bucket_name=videolyzer_data.get("bucket_name"),
      table_name=videolyzer_data.get("table_name", "videolyzer-videos"),
      video_suffix=videolyzer_data.get("video_suffix"),
      removal_policy=parse_removal_policy(
        videolyzer_data.get("removal_policy", "retain")
      ),
      region=videolyzer_data.get("region", "us-east-1"),
    )

    return cls(notifier=notifier, videolyzer=videolyzer)


def parse_removal_policy(value: str) -> RemovalPolicy:
  """Convert a removal policy name to the enum, defaulting to RETAIN."""
  return {
    "retain": RemovalPolicy.RETAIN,
    "destroy": RemovalPolicy.DESTROY,
    "snapshot": RemovalPolicy.SNAPSHOT,
  }.get(value.lower(), RemovalPolicy.RETAIN)
