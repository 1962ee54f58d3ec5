"""Slack notifications for Auto Scaling events via EventBridge and Lambda."""

from pathlib import Path

from aws_cdk import Duration
from aws_cdk import aws_events as events
from aws_cdk import aws_events_targets as targets
from aws_cdk import aws_lambda as lambda_
from constructs import Construct

from infrastructure.config import AUTOSCALING_DETAIL_TYPES

FUNCTIONS_DIR = Path(__file__).parent.parent.parent / "functions"


class NotifierConstruct(Construct):
  """Lambda that posts Auto Scaling instance events to Slack."""

  def __init__(
    self,
    scope: Construct,
    id: str,
    *,
    slack_webhook_url: str,
    autoscaling_group_name: str | None = None,
    resource_prefix: str = "",
  ) -> None:
    super().__init__(scope, id)

    self.handler = lambda_.Function(
      self,
      f"{resource_prefix}-notifier-lambda" if resource_prefix else "Handler",
      function_name=f"{resource_prefix}-post-to-slack" if resource_prefix else None,
      runtime=lambda_.Runtime.PYTHON_3_12,
      handler="notifier.post_to_slack",
      code=lambda_.Code.from_asset(str(FUNCTIONS_DIR / "notifier")),
      environment={
        "SLACK_WEBHOOK_URL": slack_webhook_url,
      },
      timeout=Duration.seconds(30),
    )

    detail = (
      {"AutoScalingGroupName": [autoscaling_group_name]}
      if autoscaling_group_name
      else None
    )

    self.rule = events.Rule(
      self,
      f"{resource_prefix}-autoscaling-rule" if resource_prefix else "AutoScalingRule",
      event_pattern=events.EventPattern(
        source=["aws.autoscaling"],
        detail_type=AUTOSCALING_DETAIL_TYPES,
        detail=detail,
      ),
      targets=[targets.LambdaFunction(self.handler)],
    )
