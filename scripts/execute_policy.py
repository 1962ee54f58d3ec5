#!/usr/bin/env python3
"""Run an Auto Scaling policy by hand to trigger scaling notifications."""

import argparse
import sys

import boto3


def execute_policy(
  group: str,
  policy: str,
  profile: str | None = None,
  region: str = "us-east-1",
) -> None:
  """Execute a scaling policy on an Auto Scaling group.

  Args:
    group: Auto Scaling group name
    policy: Scaling policy name
    profile: AWS shared-credentials profile
    region: AWS region (default: us-east-1)
  """
  session = boto3.Session(profile_name=profile, region_name=region)
  autoscaling = session.client("autoscaling")

  autoscaling.execute_policy(AutoScalingGroupName=group, PolicyName=policy)
  print(f"✓ Executed '{policy}' on '{group}'")


def main() -> None:
  """Execute the configured scaling policy."""
  parser = argparse.ArgumentParser(description="Execute an Auto Scaling policy")
  parser.add_argument(
    "--group",
    default="Notifon Scaling Group",
    help="Auto Scaling group name (default: Notifon Scaling Group)",
  )
  parser.add_argument(
    "--policy",
    default="Scale Up",
    help="Scaling policy name (default: Scale Up)",
  )
  parser.add_argument(
    "--profile",
    help="AWS profile to use",
  )
  parser.add_argument(
    "--region",
    default="us-east-1",
    help="AWS region (default: us-east-1)",
  )
  args = parser.parse_args()

  try:
    execute_policy(args.group, args.policy, args.profile, args.region)
  except Exception as e:
    print(f"Error: {e}", file=sys.stderr)
    sys.exit(1)


if __name__ == "__main__":
  main()
