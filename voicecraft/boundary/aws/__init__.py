"""
AWS boundary modules.

Exports: CognitoIdentityClient, S3UploadClient
"""

from .cognito_client import CognitoIdentityClient
from .s3_client import S3UploadClient

__all__ = ["CognitoIdentityClient", "S3UploadClient"]
