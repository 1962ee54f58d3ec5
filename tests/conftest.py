"""Pytest fixtures for manager and CDK stack tests."""

from collections.abc import Callable
from unittest.mock import MagicMock

import aws_cdk as cdk
import pytest

SessionFactory = Callable[..., MagicMock]


@pytest.fixture
def make_session() -> SessionFactory:
  """Build mocked boto3 sessions.

  Every ``client()`` call on a session returns the same mock client, so
  tests configure responses on ``session.client.return_value``.
  """

  def factory(region: str = "us-east-1") -> MagicMock:
    session = MagicMock()
    session.region_name = region
    return session

  return factory


@pytest.fixture
def stack() -> cdk.Stack:
  """Create a CDK Stack in us-east-1 for testing."""
  return cdk.Stack(cdk.App(), "TestStack", env=cdk.Environment(region="us-east-1"))
