"""CDK stack for Auto Scaling notifications."""

from typing import Any

import aws_cdk as cdk
from constructs import Construct

from infrastructure.cdk_constructs import NotifierConstruct
from infrastructure.config import NotifierConfig


class NotifonStack(cdk.Stack):
  """Stack that relays Auto Scaling events to Slack."""

  def __init__(
    self,
    scope: Construct,
    id: str,
    *,
    notifier_config: NotifierConfig,
    **kwargs: Any,
  ) -> None:
    super().__init__(scope, id, **kwargs)

    self.notifier = NotifierConstruct(
      self,
      "Notifier",
      slack_webhook_url=notifier_config.slack_webhook_url,
      autoscaling_group_name=notifier_config.autoscaling_group_name,
      resource_prefix=self.stack_name,
    )

    cdk.Tags.of(self).add("Project", "notifon")
