"""Label uploaded videos with Rekognition and store the results."""

import json
import os
from decimal import Decimal
from typing import Any
from urllib.parse import unquote_plus

import boto3


def start_label_detection(bucket: str, key: str) -> str:
  """Start a Rekognition label detection job for a video in S3."""
  rekognition = boto3.client("rekognition")

  response = rekognition.start_label_detection(
    Video={"S3Object": {"Bucket": bucket, "Name": key}},
    NotificationChannel={
      "SNSTopicArn": os.environ["VIDEO_PROCESSED_SNSTOPIC_ARN"],
      "RoleArn": os.environ["REKOGNITION_PUBLISH_SNSTOPIC_ROLE_ARN"],
    },
  )

  job_id: str = response["JobId"]
  print(f"Rekognition JobId: {job_id}")
  return job_id


def get_video_labels(job_id: str) -> list[dict[str, Any]]:
  """Get every label a finished job detected, across all result pages."""
  rekognition = boto3.client("rekognition")

  response = rekognition.get_label_detection(JobId=job_id)
  labels: list[dict[str, Any]] = list(response.get("Labels", []))

  next_token = response.get("NextToken")
  while next_token:
    response = rekognition.get_label_detection(JobId=job_id, NextToken=next_token)
    labels.extend(response.get("Labels", []))
    next_token = response.get("NextToken")

  return labels


def make_item(data: Any) -> Any:
  """Convert floats to Decimal, which DynamoDB requires."""
  return json.loads(json.dumps(data), parse_float=Decimal)


def put_labels_in_db(bucket: str, key: str, labels: list[dict[str, Any]]) -> None:
  """Store a video's labels in the videos table."""
  table = boto3.resource("dynamodb").Table(os.environ["VIDEOS_DYNAMODB_TABLE"])

  table.put_item(
    Item={
      "videoName": key,
      "videoBucket": bucket,
      "labels": make_item(labels),
    }
  )
  print(f"Stored {len(labels)} labels for s3://{bucket}/{key}")


def start_processing_video(event: dict[str, Any], context: Any) -> list[str]:
  """Lambda entry point for S3 object-created notifications."""
  job_ids = []
  for record in event.get("Records", []):
    bucket = record["s3"]["bucket"]["name"]
    # S3 URL-encodes keys in notifications
    key = unquote_plus(record["s3"]["object"]["key"])
    job_ids.append(start_label_detection(bucket, key))
  return job_ids


def handle_processed_video(event: dict[str, Any], context: Any) -> None:
  """Lambda entry point for Rekognition completion messages from SNS."""
  for record in event.get("Records", []):
    message = json.loads(record["Sns"]["Message"])

    if message.get("Status") != "SUCCEEDED":
      print(f"Skipping job {message.get('JobId')} with status {message.get('Status')}")
      continue

    labels = get_video_labels(message["JobId"])
    video = message["Video"]
    put_labels_in_db(video["S3Bucket"], video["S3ObjectName"], labels)
