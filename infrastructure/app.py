#!/usr/bin/env python3
"""CDK application entry point for the serverless services."""

import sys
from pathlib import Path

# Add the project root to the Python path
sys.path.insert(0, str(Path(__file__).parent.parent))

import aws_cdk as cdk
import boto3

from infrastructure.config import Config
from infrastructure.stacks import NotifonStack, VideolyzerStack


def get_account_id() -> str:
  """Get AWS account ID from current credentials."""
  sts = boto3.client("sts")
  return str(sts.get_caller_identity()["Account"])


def main() -> None:
  """Create CDK app with a stack for each enabled service."""
  app = cdk.App()

  # Load configuration
  config_path = app.node.try_get_context("config") or "services.yaml"
  config = Config.from_yaml(Path(config_path))

  # Get account ID from credentials
  account_id = get_account_id()

  if config.notifier.enabled:
    NotifonStack(
      app,
      "Notifon",
      notifier_config=config.notifier,
      env=cdk.Environment(
        account=account_id,
        region=config.notifier.region,
      ),
      description="Slack notifications for Auto Scaling events",
    )

  if config.videolyzer.enabled:
    VideolyzerStack(
      app,
      "Videolyzer",
      videolyzer_config=config.videolyzer,
      env=cdk.Environment(
        account=account_id,
        region=config.videolyzer.region,
      ),
      description="Rekognition label detection for uploaded videos",
    )

  app.synth()


if __name__ == "__main__":
  main()
