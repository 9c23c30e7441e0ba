"""
Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
SPDX-License-Identifier: Apache-2.0
"""

from datetime import UTC, datetime, timedelta, timezone

from freezegun import freeze_time
import pytest

from aws_sigv4 import AWSCredentialIdentity, SignRequest


class TestSignRequest:
    def test_defaults(self):
        request = SignRequest()
        assert request.method is None
        assert request.path is None
        assert request.query is None
        assert request.payload is None
        assert request.region is None
        assert request.service is None
        assert request.credentials is None
        assert len(request.headers) == 0

    def test_setters_chain(self):
        identity = AWSCredentialIdentity(
            access_key_id="AKID", secret_access_key="SECRET"
        )
        request = SignRequest()
        result = (
            request.with_method("GET")
            .with_path("/")
            .with_query("a=1")
            .with_payload("body")
            .with_header("Host", "example.com")
            .with_region("eu-west-1")
            .with_service("ec2")
            .with_credentials(identity)
        )

        assert result is request
        assert request.method == "GET"
        assert request.path == "/"
        assert request.query == "a=1"
        assert request.payload == "body"
        assert request.headers["host"].values == ["example.com"]
        assert request.region == "eu-west-1"
        assert request.service == "ec2"
        assert request.credentials is identity

    def test_with_headers(self):
        request = SignRequest().with_headers(
            {"Content-Type": "application/json", "X-Amz-Target": "Service.Op"}
        )
        assert request.headers.to_dict() == {
            "content-type": "application/json",
            "x-amz-target": "Service.Op",
        }

    @freeze_time("2023-12-15 12:00:00")
    def test_date_fixed_at_construction(self):
        request = SignRequest()
        assert request.amz_date == "20231215T120000Z"
        assert request.date_stamp == "20231215"

    def test_date_does_not_drift(self):
        with freeze_time("2023-12-15 12:00:00") as frozen:
            request = SignRequest()
            frozen.tick(timedelta(hours=1))
            assert request.amz_date == "20231215T120000Z"

    @pytest.mark.parametrize(
        "date",
        [
            datetime(2011, 9, 9, 23, 36, 0),
            datetime(2011, 9, 9, 23, 36, 0, tzinfo=UTC),
            datetime(2011, 9, 10, 1, 36, 0, tzinfo=timezone(timedelta(hours=2))),
        ],
    )
    def test_with_date_normalizes_to_utc(self, date: datetime):
        request = SignRequest().with_date(date)
        assert request.amz_date == "20110909T233600Z"
        assert request.date_stamp == "20110909"
        assert request.date.tzinfo == UTC
