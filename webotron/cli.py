#!/usr/bin/env python3
"""Webotron: deploy static websites to AWS.

- Configure S3 buckets: create them, set them up for static website
  hosting and deploy local files to them
- Configure DNS with Route 53
- Configure a CDN and SSL with CloudFront and ACM
"""

import argparse
import sys
from collections.abc import Callable, Sequence
from typing import Any

import boto3
import yaml
from botocore.exceptions import ClientError

from webotron import regions
from webotron.bucket import BucketManager
from webotron.certificate import CertificateManager
from webotron.config import WebotronConfig
from webotron.distribution import DistributionManager
from webotron.domain_manager import DomainManager

Command = Callable[[Any, argparse.Namespace, WebotronConfig], None]


def get_session(profile: str, region: str) -> Any:
  """Create a boto3 session for a shared-credentials profile."""
  if profile and profile != "default":
    return boto3.Session(profile_name=profile, region_name=region)
  return boto3.Session(region_name=region)


def domain_name(value: str) -> str:
  """Argument type for domain names."""
  value = value.strip().lower()
  if not value:
    raise argparse.ArgumentTypeError("domain must not be empty")
  return value


def list_buckets(session: Any, args: argparse.Namespace, config: WebotronConfig) -> None:
  """List all S3 buckets."""
  for bucket in BucketManager(session).all_buckets():
    print(bucket)


def list_bucket_objects(
  session: Any, args: argparse.Namespace, config: WebotronConfig
) -> None:
  """List objects in an S3 bucket."""
  for obj in BucketManager(session).all_objects(args.bucket):
    print(obj["Key"])


def setup_bucket(session: Any, args: argparse.Namespace, config: WebotronConfig) -> None:
  """Create and configure an S3 bucket for website hosting."""
  bucket_manager = BucketManager(session)

  bucket_manager.init_bucket(args.bucket)
  bucket_manager.disable_block_public_access(args.bucket)
  bucket_manager.set_policy(args.bucket)
  bucket_manager.configure_website(
    args.bucket, config.index_document, config.error_document
  )

  print(f"Website URL: {bucket_manager.get_bucket_url(args.bucket)}")


def sync(session: Any, args: argparse.Namespace, config: WebotronConfig) -> None:
  """Sync the contents of PATHNAME to BUCKET."""
  bucket_manager = BucketManager(session)

  for key in bucket_manager.sync(args.pathname, args.bucket):
    print(f"  Uploaded: {key}")

  print(f"Website URL: {bucket_manager.get_bucket_url(args.bucket)}")


def setup_domain(session: Any, args: argparse.Namespace, config: WebotronConfig) -> None:
  """Point DOMAIN at the website bucket of the same name."""
  domain = args.domain
  bucket_manager = BucketManager(session)
  domain_manager = DomainManager(session)

  # Fails with a ClientError if the bucket doesn't exist
  region = bucket_manager.get_region_name(domain)
  if not regions.known_region(region):
    print(f"Error: no website endpoint known for region {region}", file=sys.stderr)
    sys.exit(1)

  zone = domain_manager.find_hosted_zone(domain)
  if zone is None:
    print(f"Creating hosted zone for {domain}")
    zone = domain_manager.create_hosted_zone(domain)

  domain_manager.create_s3_domain_record(zone, domain, regions.get_endpoint(region))
  print(f"Domain URL: http://{domain}")


def find_cert(session: Any, args: argparse.Namespace, config: WebotronConfig) -> None:
  """Find an issued certificate valid for DOMAIN."""
  cert = CertificateManager(session).find_matching_cert(args.domain)
  if cert is None:
    print("No matching cert found.")
    return
  print(cert.arn)


def setup_cdn(session: Any, args: argparse.Namespace, config: WebotronConfig) -> None:
  """Serve BUCKET at DOMAIN through CloudFront over HTTPS."""
  domain = args.domain
  dist_manager = DistributionManager(session)

  dist = dist_manager.find_matching_dist(domain)
  if dist is None:
    cert = CertificateManager(session).find_matching_cert(domain)
    if cert is None:
      print("Error: No matching cert found.", file=sys.stderr)
      sys.exit(1)

    dist = dist_manager.create_dist(domain, cert, args.bucket)
    print("Waiting for distribution deployment...")
    dist_manager.await_deploy(dist)

  domain_manager = DomainManager(session)
  zone = domain_manager.find_hosted_zone(domain)
  if zone is None:
    print(f"Creating hosted zone for {domain}")
    zone = domain_manager.create_hosted_zone(domain)

  domain_manager.create_cf_domain_record(zone, domain, dist["DomainName"])
  print(f"Domain URL: https://{domain}")


def build_parser() -> argparse.ArgumentParser:
  """Build the argument parser with one subcommand per operation."""
  parser = argparse.ArgumentParser(
    prog="webotron",
    description="Webotron deploys websites to AWS.",
  )
  parser.add_argument(
    "--profile",
    help="Use a given AWS profile (default: from config, else 'default')",
  )
  parser.add_argument(
    "--region",
    help="Specify AWS region (default: from config, else us-east-1)",
  )
  parser.add_argument(
    "--config",
    help="Path to a YAML settings file (default: webotron.yaml if present)",
  )

  subparsers = parser.add_subparsers(dest="command", required=True)

  def add_command(name: str, func: Command) -> argparse.ArgumentParser:
    command = subparsers.add_parser(name, help=func.__doc__)
    command.set_defaults(func=func)
    return command

  add_command("list-buckets", list_buckets)

  command = add_command("list-bucket-objects", list_bucket_objects)
  command.add_argument("bucket")

  command = add_command("setup-bucket", setup_bucket)
  command.add_argument("bucket")

  command = add_command("sync", sync)
  command.add_argument("pathname")
  command.add_argument("bucket")

  command = add_command("setup-domain", setup_domain)
  command.add_argument("domain", type=domain_name)

  command = add_command("find-cert", find_cert)
  command.add_argument("domain", type=domain_name)

  command = add_command("setup-cdn", setup_cdn)
  command.add_argument("domain", type=domain_name)
  command.add_argument("bucket")

  return parser


def main(argv: Sequence[str] | None = None) -> None:
  """Main entry point."""
  args = build_parser().parse_args(argv)

  try:
    config = WebotronConfig.load(args.config)
  except (OSError, yaml.YAMLError) as e:
    print(f"Error: cannot read config: {e}", file=sys.stderr)
    sys.exit(1)

  profile = args.profile or config.profile
  region = args.region or config.region

  session = get_session(profile, region)

  try:
    args.func(session, args, config)
  except (ClientError, OSError) as e:
    print(f"Error: {e}", file=sys.stderr)
    sys.exit(1)


if __name__ == "__main__":
  main()
