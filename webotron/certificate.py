"""ACM certificate lookup."""

from typing import Any

from webotron.domain import Certificate, find_certificate

# CloudFront only accepts certificates from us-east-1
CERTIFICATE_REGION = "us-east-1"


class CertificateManager:
  """Find issued certificates that cover a domain."""

  def __init__(self, session: Any) -> None:
    self.session = session
    self.acm = session.client("acm", region_name=CERTIFICATE_REGION)

  def list_certificates(self) -> list[Certificate]:
    """Get every issued certificate with its subject alternative names."""
    certificates: list[Certificate] = []
    paginator = self.acm.get_paginator("list_certificates")
    for page in paginator.paginate(CertificateStatuses=["ISSUED"]):
      for summary in page.get("CertificateSummaryList", []):
        # Summaries truncate the SAN list, so describe each one
        response = self.acm.describe_certificate(
          CertificateArn=summary["CertificateArn"]
        )
        certificates.append(Certificate.from_api(response["Certificate"]))
    return certificates

  def find_matching_cert(self, domain: str) -> Certificate | None:
    """Find the first issued certificate valid for the domain."""
    return find_certificate(domain, self.list_certificates())
