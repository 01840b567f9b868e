"""Tests for request descriptor construction."""

import json

import pytest
from pydantic import ValidationError as PydanticValidationError

from core.domain.models import HttpMethod, MultipartField
from core.services.operations import (
    CLASSIFY,
    CREATE_CLASSIFIER,
    DELETE_CLASSIFIER,
    DETECT_FACES,
    GET_CLASSIFIER,
    LIST_CLASSIFIERS,
    RECOGNIZE_TEXT,
    get_contract,
)
from core.services.request_builder import build_request, merge_defaults
from tests.conftest import make_stream


class TestMergeDefaults:
    def test_caller_values_win(self):
        merged = merge_defaults({"owners": ["me"]}, {"owners": ["me", "IBM"], "classifier_ids": ["default"]})
        assert merged == {"owners": ["me"], "classifier_ids": ["default"]}

    def test_none_does_not_override_default(self):
        merged = merge_defaults({"owners": None}, {"owners": ["me", "IBM"]})
        assert merged == {"owners": ["me", "IBM"]}

    def test_shallow_override(self):
        merged = merge_defaults({"nested": {"b": 2}}, {"nested": {"a": 1}})
        assert merged == {"nested": {"b": 2}}


class TestClassify:
    def test_url_yields_get_with_defaults(self):
        descriptor = build_request({"url": "http://x/dog.jpg"}, get_contract(CLASSIFY))
        assert descriptor.method is HttpMethod.GET
        assert descriptor.path == "/v3/classify"
        assert descriptor.query_params == {
            "url": "http://x/dog.jpg",
            "classifier_ids": ["default"],
            "owners": ["me", "IBM"],
        }
        assert descriptor.multipart_fields == {}

    def test_stream_yields_post_with_json_side_channel(self, stream):
        descriptor = build_request({"images_file": stream, "threshold": 0.6}, get_contract(CLASSIFY))
        assert descriptor.method is HttpMethod.POST
        assert descriptor.query_params == {}
        assert descriptor.multipart_fields["images_file"] is stream

        side_channel = descriptor.multipart_fields["parameters"]
        assert isinstance(side_channel, MultipartField)
        assert side_channel.content_type == "application/json"
        assert json.loads(side_channel.value) == {
            "classifier_ids": ["default"],
            "owners": ["me", "IBM"],
            "threshold": 0.6,
        }

    def test_accept_language_becomes_header(self):
        descriptor = build_request(
            {"url": "http://x/dog.jpg", "Accept-Language": "es"},
            get_contract(CLASSIFY),
        )
        assert descriptor.headers == {"Accept-Language": "es"}
        assert "Accept-Language" not in descriptor.query_params

    def test_unknown_keys_are_dropped(self, stream):
        descriptor = build_request({"images_file": stream, "colour": "red"}, get_contract(CLASSIFY))
        assert set(descriptor.multipart_fields) == {"images_file", "parameters"}
        assert "colour" not in json.loads(descriptor.multipart_fields["parameters"].value)

    def test_building_twice_gives_equal_descriptors(self, stream):
        params = {"images_file": stream, "classifier_ids": ["fruit_1"], "threshold": 0.2}
        first = build_request(params, get_contract(CLASSIFY))
        second = build_request(params, get_contract(CLASSIFY))
        assert first == second

    def test_builder_does_not_mutate_params(self):
        params = {"url": "http://x/dog.jpg"}
        build_request(params, get_contract(CLASSIFY))
        assert params == {"url": "http://x/dog.jpg"}


@pytest.mark.parametrize("operation", [DETECT_FACES, RECOGNIZE_TEXT])
class TestFaceAndText:
    def test_stream_is_the_only_field(self, operation, stream):
        descriptor = build_request({"images_file": stream, "image_file": stream}, get_contract(operation))
        assert descriptor.method is HttpMethod.POST
        assert descriptor.multipart_fields == {"images_file": stream}

    def test_url_is_the_only_query_param(self, operation):
        descriptor = build_request({"url": "http://x/car.png", "threshold": 1}, get_contract(operation))
        assert descriptor.method is HttpMethod.GET
        assert descriptor.query_params == {"url": "http://x/car.png"}


class TestClassifiers:
    def test_training_fields_are_one_per_example_set(self):
        foo, bar = make_stream(), make_stream()
        descriptor = build_request(
            {"foo_positive_examples": foo, "bar_positive_examples": bar, "name": "foo-vs-bar", "junk": "x"},
            get_contract(CREATE_CLASSIFIER),
        )
        assert descriptor.method is HttpMethod.POST
        assert descriptor.path == "/v3/classifiers"
        assert descriptor.multipart_fields == {
            "foo_positive_examples": foo,
            "bar_positive_examples": bar,
            "name": "foo-vs-bar",
        }

    def test_list_forwards_verbose_only(self):
        descriptor = build_request({"verbose": True, "junk": 1}, get_contract(LIST_CLASSIFIERS))
        assert descriptor.method is HttpMethod.GET
        assert descriptor.query_params == {"verbose": True}

    def test_get_uses_path_param(self):
        descriptor = build_request({"classifier_id": "fruit_679357912"}, get_contract(GET_CLASSIFIER))
        assert descriptor.method is HttpMethod.GET
        assert descriptor.path == "/v3/classifiers/{classifier_id}"
        assert descriptor.path_params == {"classifier_id": "fruit_679357912"}
        assert descriptor.query_params == {}

    def test_delete_has_no_body(self):
        descriptor = build_request({"classifier_id": "fruit_679357912", "extra": 1}, get_contract(DELETE_CLASSIFIER))
        assert descriptor.method is HttpMethod.DELETE
        assert descriptor.path_params == {"classifier_id": "fruit_679357912"}
        assert descriptor.query_params == {}
        assert not descriptor.has_body


def test_descriptor_is_frozen():
    descriptor = build_request({"url": "http://x/dog.jpg"}, get_contract(CLASSIFY))
    with pytest.raises(PydanticValidationError):
        descriptor.method = HttpMethod.POST
