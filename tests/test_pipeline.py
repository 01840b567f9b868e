"""End-to-end tests for resolve -> validate -> build."""

import json

import pytest

from core.domain.errors import ErrorKind
from core.domain.models import HttpMethod, PipelineResult
from core.services.operations import (
    CLASSIFY,
    CREATE_CLASSIFIER,
    DETECT_FACES,
    GET_CLASSIFIER,
    list_operations,
)
from core.services.pipeline import prepare_request
from tests.conftest import make_stream


def test_classify_by_url_is_a_get_with_defaults():
    result = prepare_request(CLASSIFY, {"url": "http://x/dog.jpg"})
    assert result.ok
    descriptor = result.descriptor
    assert descriptor.method is HttpMethod.GET
    assert descriptor.query_params["classifier_ids"] == ["default"]
    assert descriptor.query_params["owners"] == ["me", "IBM"]


def test_classify_by_stream_is_a_multipart_post(stream):
    result = prepare_request(CLASSIFY, {"images_file": stream})
    descriptor = result.descriptor
    assert descriptor.method is HttpMethod.POST
    assert descriptor.multipart_fields["images_file"] is stream
    assert json.loads(descriptor.multipart_fields["parameters"].value) == {
        "classifier_ids": ["default"],
        "owners": ["me", "IBM"],
    }


def test_detect_faces_alias_matches_canonical_key(stream):
    via_alias = prepare_request(DETECT_FACES, {"image_file": stream})
    via_canonical = prepare_request(DETECT_FACES, {"images_file": stream})
    assert via_alias.descriptor == via_canonical.descriptor


def test_get_classifier_without_id_names_the_key():
    result = prepare_request(GET_CLASSIFIER, {})
    assert not result.ok
    assert result.descriptor is None
    assert result.error.kind is ErrorKind.MISSING_REQUIRED_PARAMETER
    assert result.error.key == "classifier_id"


def test_validation_errors_come_back_in_the_result():
    result = prepare_request(CLASSIFY, {})
    assert result.error.kind is ErrorKind.MISSING_OR_CONFLICTING_INPUT


@pytest.mark.parametrize(
    "params, ok",
    [
        ({"foo_positive_examples": make_stream()}, False),
        ({"foo_positive_examples": make_stream(), "negative_examples": make_stream()}, True),
        ({f"{c}_positive_examples": make_stream() for c in ("a", "b", "c")}, True),
    ],
)
def test_training_example_thresholds(params, ok):
    result = prepare_request(CREATE_CLASSIFIER, params)
    assert result.ok is ok
    if not ok:
        assert result.error.kind is ErrorKind.INSUFFICIENT_TRAINING_EXAMPLES
        assert (result.error.found, result.error.required) == (1, 2)


def test_every_operation_accepts_a_missing_bag_without_raising():
    for operation in list_operations():
        assert isinstance(prepare_request(operation, None), PipelineResult)


def test_unknown_operation_is_a_programming_error():
    with pytest.raises(KeyError):
        prepare_request("train_everything", {})


def test_pipeline_result_requires_exactly_one_outcome():
    with pytest.raises(ValueError):
        PipelineResult(operation=CLASSIFY)
