"""Route 53 hosted zones and alias records."""

import uuid
from typing import Any

from webotron.domain import HostedZone, find_hosted_zone
from webotron.regions import Endpoint

# Hosted zone ID shared by every CloudFront distribution
CLOUDFRONT_HOSTED_ZONE_ID = "Z2FDTNDATAQYW2"


class DomainManager:
  """Find and create hosted zones and point records at sites."""

  def __init__(self, session: Any) -> None:
    self.session = session
    self.route53 = session.client("route53")

  def list_hosted_zones(self) -> list[HostedZone]:
    """Get all hosted zones in the order Route 53 returns them."""
    zones: list[HostedZone] = []
    paginator = self.route53.get_paginator("list_hosted_zones")
    for page in paginator.paginate():
      zones.extend(HostedZone.from_api(zone) for zone in page.get("HostedZones", []))
    return zones

  def find_hosted_zone(self, domain: str) -> HostedZone | None:
    """Find the hosted zone that serves a domain."""
    return find_hosted_zone(domain, self.list_hosted_zones())

  def create_hosted_zone(self, domain: str) -> HostedZone:
    """Create a hosted zone for the domain's last two labels.

    www.example.com gets the zone "example.com.".
    """
    zone_name = ".".join(domain.split(".")[-2:]) + "."
    response = self.route53.create_hosted_zone(
      Name=zone_name,
      CallerReference=str(uuid.uuid4()),
    )
    return HostedZone.from_api(response["HostedZone"])

  def create_s3_domain_record(
    self, zone: HostedZone, domain: str, endpoint: Endpoint
  ) -> dict[str, Any]:
    """Point the domain at an S3 website endpoint."""
    return self._upsert_alias(zone, domain, endpoint.host, endpoint.zone)

  def create_cf_domain_record(
    self, zone: HostedZone, domain: str, cf_domain: str
  ) -> dict[str, Any]:
    """Point the domain at a CloudFront distribution."""
    return self._upsert_alias(zone, domain, cf_domain, CLOUDFRONT_HOSTED_ZONE_ID)

  def _upsert_alias(
    self, zone: HostedZone, domain: str, dns_name: str, target_zone_id: str
  ) -> dict[str, Any]:
    response: dict[str, Any] = self.route53.change_resource_record_sets(
      HostedZoneId=zone.id,
      ChangeBatch={
        "Comment": "Created by webotron",
        "Changes": [
          {
            "Action": "UPSERT",
            "ResourceRecordSet": {
              "Name": domain,
              "Type": "A",
              "AliasTarget": {
                "HostedZoneId": target_zone_id,
                "DNSName": dns_name,
                "EvaluateTargetHealth": False,
              },
            },
          }
        ],
      },
    )
    return response
