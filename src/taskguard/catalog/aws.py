# catalog/aws.py
from __future__ import annotations

from typing import List

from ..dsl import category, sh, target
from ..model import Target


def aws_targets() -> List[Target]:
    return category(
        "AWS",
        target(
            "aws-bucket-create",
            sh(
                "aws s3api create-bucket --bucket aws_${ENV}-tfstates"
                " --region ${AWS_REGION}"
                " --create-bucket-configuration LocationConstraint=${AWS_REGION}"
            ),
            guard=["ENV"],
            help="Create bucket for bootstrap",
        ),
        target(
            "aws-dynamodb-create-table",
            sh(
                "aws dynamodb create-table"
                " --region ${AWS_REGION}"
                " --table-name aws_${ENV}-tfstate-lock"
                " --attribute-definitions AttributeName=LockID,AttributeType=S"
                " --key-schema AttributeName=LockID,KeyType=HASH"
                " --provisioned-throughput ReadCapacityUnits=1,WriteCapacityUnits=1"
            ),
            guard=["ENV"],
            help="Create DynamoDB table",
        ),
        target(
            "aws-secret-version-create",
            sh(
                "aws secretsmanager create-secret --name portefaix-version"
                ' --description "Portefaix version"'
                " --tags Key=project,Value=portefaix"
                " --tags Key=env,Value=${ENV}"
                " --tags Key=service,Value=secrets"
                " --tags Key=made-by,Value=awscli"
                " --secret-string ${VERSION}"
            ),
            guard=["ENV", "VERSION"],
            help="Create the secret holding the version",
        ),
        target(
            "aws-secret-version-update",
            sh("aws secretsmanager update-secret --secret-id portefaix-version --secret-string ${VERSION}"),
            guard=["ENV", "VERSION"],
            help="Update the secret holding the version",
        ),
    )
