"""S3 bucket operations for static website hosting."""

import json
import mimetypes
from pathlib import Path
from typing import Any

from botocore.exceptions import ClientError

from webotron import regions


class BucketManager:
  """Create, configure and fill S3 website buckets."""

  def __init__(self, session: Any) -> None:
    self.session = session
    self.s3 = session.client("s3")

  def all_buckets(self) -> list[str]:
    """Get the names of all buckets."""
    response = self.s3.list_buckets()
    return [bucket["Name"] for bucket in response.get("Buckets", [])]

  def all_objects(self, bucket: str) -> list[dict[str, Any]]:
    """Get all object summaries in a bucket."""
    objects: list[dict[str, Any]] = []
    paginator = self.s3.get_paginator("list_objects_v2")
    for page in paginator.paginate(Bucket=bucket):
      objects.extend(page.get("Contents", []))
    return objects

  def get_region_name(self, bucket: str) -> str:
    """Get the region a bucket lives in."""
    response = self.s3.get_bucket_location(Bucket=bucket)
    # us-east-1 reports no location constraint
    return response.get("LocationConstraint") or "us-east-1"

  def get_bucket_url(self, bucket: str) -> str:
    """Get the website URL of a bucket."""
    region = self.get_region_name(bucket)
    if regions.known_region(region):
      return f"http://{bucket}.{regions.get_endpoint(region).host}"
    return f"http://{bucket}.s3-website-{region}.amazonaws.com"

  def init_bucket(self, bucket: str) -> None:
    """Create the bucket, reusing it if we already own it."""
    kwargs: dict[str, Any] = {"Bucket": bucket}
    region = self.session.region_name
    if region and region != "us-east-1":
      kwargs["CreateBucketConfiguration"] = {"LocationConstraint": region}

    try:
      self.s3.create_bucket(**kwargs)
    except ClientError as e:
      if e.response.get("Error", {}).get("Code") != "BucketAlreadyOwnedByYou":
        raise
      print(f"Using existing bucket: {bucket}")

  def disable_block_public_access(self, bucket: str) -> None:
    """Remove the bucket's Block Public Access configuration."""
    self.s3.delete_public_access_block(Bucket=bucket)

  def set_policy(self, bucket: str) -> None:
    """Allow anyone to read the bucket's objects."""
    policy = {
      "Version": "2012-10-17",
      "Statement": [
        {
          "Sid": "PublicReadGetObject",
          "Effect": "Allow",
          "Principal": "*",
          "Action": ["s3:GetObject"],
          "Resource": [f"arn:aws:s3:::{bucket}/*"],
        }
      ],
    }
    self.s3.put_bucket_policy(Bucket=bucket, Policy=json.dumps(policy))

  def configure_website(
    self, bucket: str, index: str = "index.html", error: str = "error.html"
  ) -> None:
    """Enable static website hosting."""
    self.s3.put_bucket_website(
      Bucket=bucket,
      WebsiteConfiguration={
        "IndexDocument": {"Suffix": index},
        "ErrorDocument": {"Key": error},
      },
    )

  def upload_file(self, bucket: str, path: Path | str, key: str) -> None:
    """Upload a single file with a content type guessed from its key."""
    content_type = mimetypes.guess_type(key)[0] or "text/plain"
    self.s3.upload_file(
      str(path),
      bucket,
      key,
      ExtraArgs={"ContentType": content_type},
    )

  def sync(self, pathname: Path | str, bucket: str) -> list[str]:
    """Upload every file under a directory, keyed by its relative path.

    Returns:
      The uploaded keys, in upload order

    Raises:
      FileNotFoundError: pathname does not exist
      NotADirectoryError: pathname is not a directory
    """
    root = Path(pathname).expanduser().resolve()
    if not root.exists():
      raise FileNotFoundError(f"No such directory: {root}")
    if not root.is_dir():
      raise NotADirectoryError(f"Not a directory: {root}")

    keys: list[str] = []

    for path in sorted(root.rglob("*")):
      if not path.is_file():
        continue
      key = path.relative_to(root).as_posix()
      self.upload_file(bucket, path, key)
      keys.append(key)

    return keys
