"""CloudFront distributions in front of website buckets."""

import uuid
from typing import Any

from webotron.domain import Certificate


class DistributionManager:
  """Find, create and wait on CloudFront distributions."""

  def __init__(self, session: Any) -> None:
    self.session = session
    self.cloudfront = session.client("cloudfront")

  def find_matching_dist(self, domain: str) -> dict[str, Any] | None:
    """Find the first distribution with the domain as an alias."""
    paginator = self.cloudfront.get_paginator("list_distributions")
    for page in paginator.paginate():
      for dist in page.get("DistributionList", {}).get("Items", []):
        if domain in dist.get("Aliases", {}).get("Items", []):
          return dist
    return None

  def create_dist(
    self, domain: str, cert: Certificate, bucket: str | None = None
  ) -> dict[str, Any]:
    """Create a distribution serving a bucket over HTTPS.

    The bucket defaults to the one named after the domain.
    """
    bucket = bucket or domain
    origin_id = f"S3-{bucket}"

    response = self.cloudfront.create_distribution(
      DistributionConfig={
        "CallerReference": str(uuid.uuid4()),
        "Aliases": {"Quantity": 1, "Items": [domain]},
        "DefaultRootObject": "index.html",
        "Comment": "Created by webotron",
        "Enabled": True,
        "Origins": {
          "Quantity": 1,
          "Items": [
            {
              "Id": origin_id,
              "DomainName": f"{bucket}.s3.amazonaws.com",
              "S3OriginConfig": {"OriginAccessIdentity": ""},
            }
          ],
        },
        "DefaultCacheBehavior": {
          "TargetOriginId": origin_id,
          "ViewerProtocolPolicy": "redirect-to-https",
          "TrustedSigners": {"Quantity": 0, "Enabled": False},
          "ForwardedValues": {
            "Cookies": {"Forward": "all"},
            "Headers": {"Quantity": 0},
            "QueryString": False,
            "QueryStringCacheKeys": {"Quantity": 0},
          },
          "DefaultTTL": 86400,
          "MinTTL": 3600,
        },
        "ViewerCertificate": {
          "ACMCertificateArn": cert.arn,
          "SSLSupportMethod": "sni-only",
          "MinimumProtocolVersion": "TLSv1.1_2016",
        },
      }
    )
    distribution: dict[str, Any] = response["Distribution"]
    return distribution

  def await_deploy(self, dist: dict[str, Any]) -> None:
    """Block until the distribution is deployed."""
    waiter = self.cloudfront.get_waiter("distribution_deployed")
    waiter.wait(Id=dist["Id"])
