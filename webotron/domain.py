"""Match domain names against Route 53 hosted zones and ACM certificates."""

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class HostedZone:
  """A Route 53 hosted zone."""

  name: str  # Fully qualified, trailing dot (e.g. "example.com.")
  id: str
  raw: dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

  @classmethod
  def from_api(cls, data: dict[str, Any]) -> "HostedZone":
    """Build from a ListHostedZones entry."""
    return cls(name=data["Name"], id=data["Id"], raw=data)

  @property
  def domain(self) -> str:
    """Zone name without the trailing dot."""
    return self.name[:-1] if self.name.endswith(".") else self.name


@dataclass(frozen=True)
class Certificate:
  """An issued ACM certificate."""

  arn: str
  subject_alternative_names: tuple[str, ...] = ()
  raw: dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

  @classmethod
  def from_api(cls, data: dict[str, Any]) -> "Certificate":
    """Build from a DescribeCertificate ``Certificate`` payload."""
    return cls(
      arn=data["CertificateArn"],
      subject_alternative_names=tuple(data.get("SubjectAlternativeNames", [])),
      raw=data,
    )

  def matches(self, domain: str) -> bool:
    """Return True if any SAN covers the domain."""
    for name in self.subject_alternative_names:
      if name == domain:
        return True
      # "*.example.com" covers anything ending in ".example.com"
      if name.startswith("*") and domain.endswith(name[1:]):
        return True
    return False


def find_hosted_zone(domain: str, zones: Sequence[HostedZone]) -> HostedZone | None:
  """Return the first zone whose name is a suffix of the domain.

  Zones are checked in the order given; a parent zone listed before a
  more specific one wins.
  """
  for zone in zones:
    if domain.endswith(zone.domain):
      return zone
  return None


def find_certificate(
  domain: str, certificates: Sequence[Certificate]
) -> Certificate | None:
  """Return the first certificate with a SAN covering the domain."""
  for certificate in certificates:
    if certificate.matches(domain):
      return certificate
  return None
