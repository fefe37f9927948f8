"""
Conexão com o DynamoDB (AWS real ou localstack via AWS_ENDPOINT_URL)
"""

from __future__ import annotations
from typing import Optional
import logging
import os

import boto3

log = logging.getLogger(__name__)

def dynamo_resource(endpoint_url: Optional[str] = None, region: str = "us-east-1"):
    """
    Retorna o recurso DynamoDB de alto nível (com Table()).
    Credenciais vêm de AWS_ACCESS_KEY_ID / AWS_SECRET_ACCESS_KEY quando definidas;
    caso contrário o boto3 segue sua cadeia padrão (profile, role, ...)
    """
    session = boto3.session.Session(
        aws_access_key_id=os.getenv("AWS_ACCESS_KEY_ID"),
        aws_secret_access_key=os.getenv("AWS_SECRET_ACCESS_KEY"),
        region_name=region,
    )
    log.debug("Conectando ao DynamoDB region=%s endpoint=%s", region, endpoint_url or "padrão")
    return session.resource("dynamodb", endpoint_url=endpoint_url)
