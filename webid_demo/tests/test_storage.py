"""Tests for S3 listing with federated credentials."""
from unittest.mock import patch

import pytest
from botocore.exceptions import ClientError

from webid_demo.errors import StorageError
from webid_demo.federation import AwsConfig
from webid_demo.storage import list_object_keys

CREDS = AwsConfig(access_key_id="a", secret_access_key="b", session_token="c", region="us-east-1")


def test_list_object_keys_preserves_order():
    with patch("webid_demo.storage.boto3.client") as client:
        client.return_value.list_objects.return_value = {
            "Contents": [{"Key": "z.txt"}, {"Key": "a.txt"}, {"Key": "dir/m.txt"}],
        }
        keys = list_object_keys(CREDS, "bucket-1")
    assert keys == ["z.txt", "a.txt", "dir/m.txt"]
    client.return_value.list_objects.assert_called_once_with(Bucket="bucket-1")


def test_list_object_keys_empty_bucket():
    with patch("webid_demo.storage.boto3.client") as client:
        client.return_value.list_objects.return_value = {"Name": "bucket-1", "IsTruncated": False}
        assert list_object_keys(CREDS, "bucket-1") == []


def test_list_object_keys_first_page_only():
    with patch("webid_demo.storage.boto3.client") as client:
        client.return_value.list_objects.return_value = {"Contents": [{"Key": "a"}], "IsTruncated": True}
        assert list_object_keys(CREDS, "bucket-1") == ["a"]
    client.return_value.list_objects.assert_called_once()


def test_list_object_keys_access_denied():
    error = ClientError({"Error": {"Code": "AccessDenied", "Message": "Access Denied"}}, "ListObjects")
    with patch("webid_demo.storage.boto3.client") as client:
        client.return_value.list_objects.side_effect = error
        with pytest.raises(StorageError, match="Access Denied"):
            list_object_keys(CREDS, "bucket-1")
