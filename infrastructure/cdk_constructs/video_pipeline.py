"""Video labeling pipeline: S3 upload -> Rekognition -> SNS -> DynamoDB."""

from pathlib import Path

from aws_cdk import CfnOutput, Duration, RemovalPolicy
from aws_cdk import aws_dynamodb as dynamodb
from aws_cdk import aws_iam as iam
from aws_cdk import aws_lambda as lambda_
from aws_cdk import aws_s3 as s3
from aws_cdk import aws_s3_notifications as s3n
from aws_cdk import aws_sns as sns
from aws_cdk import aws_sns_subscriptions as subscriptions
from constructs import Construct

FUNCTIONS_DIR = Path(__file__).parent.parent.parent / "functions"


class VideoPipelineConstruct(Construct):
  """Label every uploaded video and store the labels.

  Creates:
  - S3 bucket that receives videos
  - Lambda that starts Rekognition label detection on upload
  - SNS topic and role Rekognition uses to report finished jobs
  - Lambda that collects the labels when a job finishes
  - DynamoDB table holding the labels per video
  """

  def __init__(
    self,
    scope: Construct,
    id: str,
    *,
    bucket_name: str | None = None,
    table_name: str | None = None,
    video_suffix: str | None = None,
    removal_policy: RemovalPolicy = RemovalPolicy.RETAIN,
  ) -> None:
    super().__init__(scope, id)

    code = lambda_.Code.from_asset(str(FUNCTIONS_DIR / "videolyzer"))

    self.bucket = s3.Bucket(
      self,
      "VideosBucket",
      bucket_name=bucket_name,
      block_public_access=s3.BlockPublicAccess.BLOCK_ALL,
      removal_policy=removal_policy,
      auto_delete_objects=removal_policy == RemovalPolicy.DESTROY,
    )

    self.table = dynamodb.Table(
      self,
      "VideosTable",
      table_name=table_name,
      partition_key=dynamodb.Attribute(
        name="videoName", type=dynamodb.AttributeType.STRING
      ),
      billing_mode=dynamodb.BillingMode.PAY_PER_REQUEST,
      removal_policy=removal_policy,
    )

    self.topic = sns.Topic(self, "VideoProcessedTopic")

    # Rekognition assumes this role to publish job completion
    self.rekognition_role = iam.Role(
      self,
      "RekognitionRole",
      assumed_by=iam.ServicePrincipal("rekognition.amazonaws.com"),
    )
    self.topic.grant_publish(self.rekognition_role)

    # Start label detection when a video lands in the bucket
    self.start_handler = lambda_.Function(
      self,
      "StartProcessingVideo",
      runtime=lambda_.Runtime.PYTHON_3_12,
      handler="videolyzer.start_processing_video",
      code=code,
      environment={
        "VIDEO_PROCESSED_SNSTOPIC_ARN": self.topic.topic_arn,
        "REKOGNITION_PUBLISH_SNSTOPIC_ROLE_ARN": self.rekognition_role.role_arn,
      },
      timeout=Duration.seconds(30),
    )
    self.start_handler.add_to_role_policy(
      iam.PolicyStatement(
        actions=["rekognition:StartLabelDetection"],
        resources=["*"],  # Rekognition video APIs don't support resource-level perms
      )
    )
    self.bucket.grant_read(self.start_handler)
    self.rekognition_role.grant_pass_role(self.start_handler.grant_principal)

    filters = [s3.NotificationKeyFilter(suffix=video_suffix)] if video_suffix else []
    self.bucket.add_event_notification(
      s3.EventType.OBJECT_CREATED,
      s3n.LambdaDestination(self.start_handler),
      *filters,
    )

    # Collect labels when Rekognition reports a finished job
    self.results_handler = lambda_.Function(
      self,
      "HandleProcessedVideo",
      runtime=lambda_.Runtime.PYTHON_3_12,
      handler="videolyzer.handle_processed_video",
      code=code,
      environment={
        "VIDEOS_DYNAMODB_TABLE": self.table.table_name,
      },
      timeout=Duration.seconds(120),
    )
    self.results_handler.add_to_role_policy(
      iam.PolicyStatement(
        actions=["rekognition:GetLabelDetection"],
        resources=["*"],
      )
    )
    self.table.grant_write_data(self.results_handler)
    self.topic.add_subscription(subscriptions.LambdaSubscription(self.results_handler))

    # Outputs
    CfnOutput(
      self,
      "BucketName",
      value=self.bucket.bucket_name,
      description="Bucket that receives videos",
    )
    CfnOutput(
      self,
      "TableName",
      value=self.table.table_name,
      description="DynamoDB table with video labels",
    )
