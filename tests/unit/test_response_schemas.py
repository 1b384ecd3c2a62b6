"""Unit tests for the envelope wire contract."""

from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from app.response.constants import ErrorCode
from app.response.constants import SuccessCode
from app.schemas.response import ErrorEnvelope
from app.schemas.response import FieldError
from app.schemas.response import SuccessEnvelope


def test_success_envelope_survives_json_round_trip() -> None:
    envelope = SuccessEnvelope(
        status_code=SuccessCode.USER_LIST,
        message="Get all users success",
        data=[{"id": 1}, {"id": 2, "tags": ["a"]}],
    )

    restored = SuccessEnvelope.model_validate(json.loads(json.dumps(envelope.to_payload())))

    assert restored == envelope
    assert restored.status_code is SuccessCode.USER_LIST


def test_error_envelope_survives_json_round_trip() -> None:
    envelope = ErrorEnvelope(
        status_code=ErrorCode.USER_EXIST,
        message="User already exists",
        errors=[FieldError(property_name="email", message="Email already used")],
    )

    wire = json.dumps(envelope.to_payload())

    assert json.loads(wire) == {
        "statusCode": 5101,
        "message": "User already exists",
        "errors": [{"property": "email", "message": "Email already used"}],
    }
    assert ErrorEnvelope.model_validate_json(wire) == envelope


def test_success_envelope_omits_missing_data() -> None:
    envelope = SuccessEnvelope(status_code=SuccessCode.OK, message="Success")

    assert envelope.to_payload() == {"statusCode": 1000, "message": "Success"}


def test_envelopes_reject_codes_from_the_other_variant() -> None:
    with pytest.raises(ValidationError):
        SuccessEnvelope(status_code=ErrorCode.GENERAL_ERROR, message="nope")
    with pytest.raises(ValidationError):
        ErrorEnvelope.model_validate({"statusCode": int(SuccessCode.OK), "message": "nope"})
