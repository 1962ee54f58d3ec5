#!/usr/bin/env python3
"""Upload a video to the videolyzer bucket to start label detection."""

import argparse
import sys
from pathlib import Path

import boto3


def upload_video(pathname: str, bucket: str, profile: str | None = None) -> str:
  """Upload a local file to the bucket under its base name.

  Args:
    pathname: Path to the video file
    bucket: Destination S3 bucket
    profile: AWS shared-credentials profile

  Returns:
    The object key
  """
  path = Path(pathname).expanduser().resolve()
  key = path.name

  session = boto3.Session(profile_name=profile)
  s3 = session.client("s3")
  s3.upload_file(str(path), bucket, key)

  print(f"✓ Uploaded {path} to s3://{bucket}/{key}")
  return key


def main() -> None:
  """Upload a video file."""
  parser = argparse.ArgumentParser(description="Upload file to S3 bucket")
  parser.add_argument("--profile", required=True, help="AWS profile to use")
  parser.add_argument("--pathname", required=True, help="Path of the file to upload")
  parser.add_argument("--bucket", required=True, help="Destination S3 bucket")
  args = parser.parse_args()

  try:
    upload_video(args.pathname, args.bucket, args.profile)
  except Exception as e:
    print(f"Error: {e}", file=sys.stderr)
    sys.exit(1)


if __name__ == "__main__":
  main()
