"""Deploy static websites to S3, Route 53 and CloudFront."""

from .domain import Certificate, HostedZone, find_certificate, find_hosted_zone

__all__ = [
  "Certificate",
  "HostedZone",
  "find_certificate",
  "find_hosted_zone",
]
