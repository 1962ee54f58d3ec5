"""Settings loader for the webotron CLI."""

from dataclasses import dataclass
from pathlib import Path

import yaml

DEFAULT_CONFIG_PATH = "webotron.yaml"


@dataclass
class WebotronConfig:
  """AWS and website settings shared by all commands."""

  profile: str = "default"
  region: str = "us-east-1"
  index_document: str = "index.html"
  error_document: str = "error.html"

  @classmethod
  def from_yaml(cls, path: Path | str = DEFAULT_CONFIG_PATH) -> "WebotronConfig":
    """Load settings from a YAML file."""
    with open(path) as f:
      data = yaml.safe_load(f) or {}

    return cls(
      profile=data.get("profile", "default"),
      region=data.get("region", "us-east-1"),
      index_document=data.get("index_document", "index.html"),
      error_document=data.get("error_document", "error.html"),
    )

  @classmethod
  def load(cls, path: Path | str | None = None) -> "WebotronConfig":
    """Load from an explicit path, the default file if present, or defaults."""
    if path is not None:
      return cls.from_yaml(path)
    if Path(DEFAULT_CONFIG_PATH).exists():
      return cls.from_yaml(DEFAULT_CONFIG_PATH)
    return cls()
