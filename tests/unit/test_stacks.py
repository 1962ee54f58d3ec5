"""Tests for the notifier and video pipeline constructs and stacks."""

import pytest
from aws_cdk import App, Environment, RemovalPolicy, Stack
from aws_cdk.assertions import Match, Template

from infrastructure.cdk_constructs import NotifierConstruct, VideoPipelineConstruct
from infrastructure.config import NotifierConfig, VideolyzerConfig
from infrastructure.stacks import NotifonStack, VideolyzerStack


class TestNotifierConstruct:
  """Test the NotifierConstruct."""

  @pytest.fixture
  def template(self, stack: Stack) -> Template:
    """Create a template for a single group."""
    NotifierConstruct(
      stack,
      "Notifier",
      slack_webhook_url="https://hooks.slack.test/x",
      autoscaling_group_name="Notifon Scaling Group",
    )
    return Template.from_stack(stack)

  def test_creates_lambda(self, template: Template) -> None:
    """Verify the Slack Lambda and its webhook setting."""
    template.has_resource_properties(
      "AWS::Lambda::Function",
      {
        "Handler": "notifier.post_to_slack",
        "Runtime": "python3.12",
        "Environment": {
          "Variables": {"SLACK_WEBHOOK_URL": "https://hooks.slack.test/x"},
        },
      },
    )

  def test_creates_autoscaling_rule(self, template: Template) -> None:
    """Verify EventBridge rule for Auto Scaling instance events."""
    template.has_resource_properties(
      "AWS::Events::Rule",
      {
        "EventPattern": {
          "source": ["aws.autoscaling"],
          "detail-type": Match.array_with(
            ["EC2 Instance Launch Successful", "EC2 Instance Terminate Successful"]
          ),
          "detail": {"AutoScalingGroupName": ["Notifon Scaling Group"]},
        },
      },
    )

  def test_rule_invokes_lambda(self, template: Template) -> None:
    """Verify EventBridge may invoke the Lambda."""
    template.has_resource_properties(
      "AWS::Lambda::Permission",
      {"Principal": "events.amazonaws.com"},
    )

  def test_all_groups_without_name(self, stack: Stack) -> None:
    """Without a group name the rule listens to every group."""
    NotifierConstruct(stack, "Notifier", slack_webhook_url="https://hooks.slack.test/x")
    template = Template.from_stack(stack)

    template.has_resource_properties(
      "AWS::Events::Rule",
      {"EventPattern": Match.object_like({"detail": Match.absent()})},
    )


class TestVideoPipelineConstruct:
  """Test the VideoPipelineConstruct."""

  @pytest.fixture
  def template(self, stack: Stack) -> Template:
    """Create a template with default options."""
    VideoPipelineConstruct(
      stack,
      "Pipeline",
      bucket_name="example-videos",
      table_name="videos",
      video_suffix=".mp4",
      removal_policy=RemovalPolicy.DESTROY,
    )
    return Template.from_stack(stack)

  def test_creates_bucket(self, template: Template) -> None:
    """Verify the private videos bucket."""
    template.has_resource_properties(
      "AWS::S3::Bucket",
      {
        "BucketName": "example-videos",
        "PublicAccessBlockConfiguration": {
          "BlockPublicAcls": True,
          "BlockPublicPolicy": True,
          "IgnorePublicAcls": True,
          "RestrictPublicBuckets": True,
        },
      },
    )

  def test_creates_table(self, template: Template) -> None:
    """Verify the labels table is keyed by video name."""
    template.has_resource_properties(
      "AWS::DynamoDB::Table",
      {
        "TableName": "videos",
        "KeySchema": [{"AttributeName": "videoName", "KeyType": "HASH"}],
        "BillingMode": "PAY_PER_REQUEST",
      },
    )

  def test_creates_handlers(self, template: Template) -> None:
    """Verify both pipeline Lambdas."""
    template.has_resource_properties(
      "AWS::Lambda::Function",
      {
        "Handler": "videolyzer.start_processing_video",
        "Runtime": "python3.12",
        "Environment": {
          "Variables": {
            "VIDEO_PROCESSED_SNSTOPIC_ARN": Match.any_value(),
            "REKOGNITION_PUBLISH_SNSTOPIC_ROLE_ARN": Match.any_value(),
          },
        },
      },
    )
    template.has_resource_properties(
      "AWS::Lambda::Function",
      {
        "Handler": "videolyzer.handle_processed_video",
        "Environment": {
          "Variables": {"VIDEOS_DYNAMODB_TABLE": Match.any_value()},
        },
      },
    )

  def test_rekognition_role(self, template: Template) -> None:
    """Verify Rekognition can assume the publishing role."""
    template.has_resource_properties(
      "AWS::IAM::Role",
      {
        "AssumeRolePolicyDocument": Match.object_like(
          {
            "Statement": [
              Match.object_like(
                {"Principal": {"Service": "rekognition.amazonaws.com"}}
              )
            ],
          }
        ),
      },
    )

  def test_topic_subscription(self, template: Template) -> None:
    """Verify the results Lambda is subscribed to the topic."""
    template.resource_count_is("AWS::SNS::Topic", 1)
    template.has_resource_properties(
      "AWS::SNS::Subscription",
      {"Protocol": "lambda"},
    )

  def test_upload_notification(self, template: Template) -> None:
    """Verify uploads trigger the start Lambda with the suffix filter."""
    template.has_resource_properties(
      "Custom::S3BucketNotifications",
      {
        "NotificationConfiguration": {
          "LambdaFunctionConfigurations": [
            Match.object_like(
              {
                "Events": ["s3:ObjectCreated:*"],
                "Filter": {
                  "Key": {"FilterRules": [{"Name": "suffix", "Value": ".mp4"}]}
                },
              }
            )
          ]
        },
      },
    )

  def test_policies_grant_rekognition(self, template: Template) -> None:
    """Verify both Rekognition video actions are allowed."""
    policies = str(template.find_resources("AWS::IAM::Policy"))
    assert "rekognition:StartLabelDetection" in policies
    assert "rekognition:GetLabelDetection" in policies
    assert "iam:PassRole" in policies


class TestStacks:
  """Test the stacks built from configuration."""

  def test_notifon_stack(self) -> None:
    """Notifon stack contains the notifier and is tagged."""
    app = App()
    stack = NotifonStack(
      app,
      "Notifon",
      notifier_config=NotifierConfig(
        enabled=True, slack_webhook_url="https://hooks.slack.test/x"
      ),
      env=Environment(region="us-east-1"),
    )
    template = Template.from_stack(stack)

    template.resource_count_is("AWS::Events::Rule", 1)
    template.has_resource_properties(
      "AWS::Lambda::Function",
      {
        "FunctionName": "Notifon-post-to-slack",
        "Tags": Match.array_with([{"Key": "Project", "Value": "notifon"}]),
      },
    )

  def test_videolyzer_stack(self) -> None:
    """Videolyzer stack contains the whole pipeline."""
    app = App()
    stack = VideolyzerStack(
      app,
      "Videolyzer",
      videolyzer_config=VideolyzerConfig(enabled=True, table_name="videos"),
      env=Environment(region="us-east-1"),
    )
    template = Template.from_stack(stack)

    template.resource_count_is("AWS::S3::Bucket", 1)
    template.resource_count_is("AWS::DynamoDB::Table", 1)
    template.resource_count_is("AWS::SNS::Topic", 1)
    template.has_resource_properties(
      "AWS::DynamoDB::Table",
      {"TableName": "videos"},
    )
