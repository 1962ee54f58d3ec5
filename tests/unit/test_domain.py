"""Tests for hosted zone and certificate matching."""

from webotron.domain import (
  Certificate,
  HostedZone,
  find_certificate,
  find_hosted_zone,
)


def zone(name: str, zone_id: str = "Z1") -> HostedZone:
  return HostedZone(name=name, id=zone_id)


def cert(arn: str, *names: str) -> Certificate:
  return Certificate(arn=arn, subject_alternative_names=names)


class TestHostedZone:
  """Test the HostedZone record."""

  def test_from_api(self) -> None:
    """Zone is built from a ListHostedZones entry."""
    data = {"Id": "/hostedzone/Z123", "Name": "example.com.", "ResourceRecordSetCount": 2}

    result = HostedZone.from_api(data)

    assert result.id == "/hostedzone/Z123"
    assert result.name == "example.com."
    assert result.raw is data

  def test_domain_strips_trailing_dot(self) -> None:
    """Domain property drops the trailing dot."""
    assert zone("example.com.").domain == "example.com"
    assert zone("example.com").domain == "example.com"


class TestFindHostedZone:
  """Test find_hosted_zone."""

  def test_exact_zone(self) -> None:
    """Apex domain matches its zone."""
    z = zone("example.com.")
    assert find_hosted_zone("example.com", [z]) is z

  def test_subdomain(self) -> None:
    """Subdomain matches the parent zone."""
    z = zone("example.com.")
    assert find_hosted_zone("www.example.com", [z]) is z

  def test_no_match(self) -> None:
    """Unrelated domain is not found."""
    assert find_hosted_zone("other.org", [zone("example.com.")]) is None

  def test_empty_zone_list(self) -> None:
    """No zones means no match."""
    assert find_hosted_zone("example.com", []) is None

  def test_first_match_wins(self) -> None:
    """The first suffix match in list order wins, not the longest."""
    parent = zone("com.", "Z1")
    child = zone("example.com.", "Z2")

    assert find_hosted_zone("www.example.com", [parent, child]) is parent
    assert find_hosted_zone("www.example.com", [child, parent]) is child

  def test_skips_non_matching_zones(self) -> None:
    """Non-matching zones before the match are skipped."""
    other = zone("other.org.", "Z1")
    z = zone("example.com.", "Z2")
    assert find_hosted_zone("www.example.com", [other, z]) is z

  def test_plain_suffix_match(self) -> None:
    """Matching is a plain string suffix check."""
    z = zone("ample.com.")
    assert find_hosted_zone("example.com", [z]) is z

  def test_root_zone_matches_everything(self) -> None:
    """A zone named "." strips to an empty suffix."""
    root = zone(".")
    assert find_hosted_zone("anything.net", [root]) is root

  def test_idempotent(self) -> None:
    """Repeated calls give the same result and leave input untouched."""
    zones = [zone("com.", "Z1"), zone("example.com.", "Z2")]
    snapshot = list(zones)

    first = find_hosted_zone("www.example.com", zones)
    second = find_hosted_zone("www.example.com", zones)

    assert first is second
    assert zones == snapshot


class TestCertificate:
  """Test the Certificate record."""

  def test_from_api(self) -> None:
    """Certificate is built from a DescribeCertificate payload."""
    data = {
      "CertificateArn": "arn:aws:acm:us-east-1:123:certificate/abc",
      "SubjectAlternativeNames": ["example.com", "*.example.com"],
      "Status": "ISSUED",
    }

    result = Certificate.from_api(data)

    assert result.arn == "arn:aws:acm:us-east-1:123:certificate/abc"
    assert result.subject_alternative_names == ("example.com", "*.example.com")

  def test_from_api_without_sans(self) -> None:
    """Missing SAN list means no names."""
    result = Certificate.from_api({"CertificateArn": "A"})
    assert result.subject_alternative_names == ()


class TestFindCertificate:
  """Test find_certificate."""

  def test_wildcard_covers_subdomain(self) -> None:
    """Wildcard SAN matches a subdomain."""
    a = cert("A", "*.example.com")
    assert find_certificate("app.example.com", [a]) is a

  def test_wildcard_does_not_cover_apex(self) -> None:
    """Wildcard SAN does not match the bare domain."""
    assert find_certificate("example.com", [cert("A", "*.example.com")]) is None

  def test_wildcard_covers_deeper_subdomain(self) -> None:
    """Wildcard matching is a suffix check, so deeper names match too."""
    a = cert("A", "*.example.com")
    assert find_certificate("a.b.example.com", [a]) is a

  def test_exact_match(self) -> None:
    """Exact SAN matches."""
    a = cert("A", "example.com")
    assert find_certificate("example.com", [a]) is a

  def test_exact_no_match(self) -> None:
    """Exact SAN for a different domain does not match."""
    assert find_certificate("other.com", [cert("A", "example.com")]) is None

  def test_exact_does_not_cover_subdomain(self) -> None:
    """Non-wildcard SAN does not match subdomains."""
    assert find_certificate("www.example.com", [cert("A", "example.com")]) is None

  def test_first_certificate_wins(self) -> None:
    """First matching certificate in list order wins."""
    a = cert("A", "*.example.com")
    b = cert("B", "www.example.com")
    assert find_certificate("www.example.com", [a, b]) is a
    assert find_certificate("www.example.com", [b, a]) is b

  def test_later_san_matches(self) -> None:
    """Any SAN of a certificate can match."""
    a = cert("A", "example.com", "*.example.com")
    assert find_certificate("blog.example.com", [a]) is a

  def test_skips_non_matching_certificates(self) -> None:
    """Certificates without a matching SAN are skipped."""
    a = cert("A", "other.com")
    b = cert("B", "*.example.com")
    assert find_certificate("www.example.com", [a, b]) is b

  def test_empty_certificate_list(self) -> None:
    """No certificates means no match."""
    assert find_certificate("example.com", []) is None

  def test_idempotent(self) -> None:
    """Repeated calls give the same result."""
    certs = [cert("A", "other.com"), cert("B", "*.example.com")]
    assert find_certificate("x.example.com", certs) is find_certificate(
      "x.example.com", certs
    )
