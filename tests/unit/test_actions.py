from __future__ import annotations

import io

import pytest

from hirest.actions import (
    MATCH_ANY,
    GetRequest,
    GetResponse,
    MainRequest,
    VersionType,
    add_validation_error,
)
from hirest.core.entity import XContentParser
from hirest.exceptions import ActionRequestValidationError, ParsingError

##########################################
#     Tests for add_validation_error     #
##########################################


def test_add_validation_error_creates_error() -> None:
    error = add_validation_error("index is missing", None)
    assert isinstance(error, ActionRequestValidationError)
    assert error.validation_errors == ["index is missing"]


def test_add_validation_error_extends_error() -> None:
    error = add_validation_error("index is missing", None)
    assert add_validation_error("id is missing", error) is error
    assert error.validation_errors == ["index is missing", "id is missing"]


#################################
#     Tests for MainRequest     #
#################################


def test_main_request_validate() -> None:
    assert MainRequest().validate() is None


################################
#     Tests for GetRequest     #
################################


def test_get_request_validate() -> None:
    assert GetRequest("index", "1").validate() is None


def test_get_request_validate_missing_fields() -> None:
    error = GetRequest(None, None, type=None).validate()
    assert error is not None
    assert str(error) == (
        "Validation Failed: 1: index is missing;2: type is missing;3: id is missing;"
    )


def test_get_request_validate_empty_id() -> None:
    error = GetRequest("index", "").validate()
    assert error is not None
    assert error.validation_errors == ["id is missing"]


@pytest.mark.parametrize(
    ("version", "version_type"),
    [
        (MATCH_ANY, VersionType.INTERNAL),
        (3, VersionType.INTERNAL),
        (0, VersionType.EXTERNAL),
        (7, VersionType.EXTERNAL_GTE),
        (1, VersionType.FORCE),
    ],
)
def test_get_request_validate_version(version: int, version_type: VersionType) -> None:
    assert GetRequest("index", "1", version=version, version_type=version_type).validate() is None


def test_get_request_validate_illegal_version() -> None:
    error = GetRequest("index", "1", version_type=VersionType.EXTERNAL).validate()
    assert error is not None
    assert error.validation_errors == ["illegal version value [-3] for version type [EXTERNAL]"]


#################################
#     Tests for GetResponse     #
#################################


def test_get_response_from_document_found() -> None:
    response = GetResponse.from_document(
        {
            "_index": "index",
            "_type": "_doc",
            "_id": "1",
            "_version": 2,
            "found": True,
            "_source": {"user": "kimchy"},
        }
    )
    assert response == GetResponse(
        index="index", type="_doc", id="1", version=2, found=True, source={"user": "kimchy"}
    )
    assert response.exists


def test_get_response_from_document_not_found() -> None:
    response = GetResponse.from_document(
        {"_index": "index", "_type": "_doc", "_id": "1", "found": False}
    )
    assert not response.found
    assert response.version == -1
    assert response.source is None
    assert response.fields == {}


def test_get_response_from_document_only_id() -> None:
    response = GetResponse.from_document({"_id": "1", "found": True})
    assert response.id == "1"
    assert response.index is None
    assert response.found


def test_get_response_from_document_error_document() -> None:
    with pytest.raises(ParsingError, match=r"Missing required fields \[_index,_type,_id\]"):
        GetResponse.from_document({"error": "no such index", "status": 404})


def test_get_response_from_document_not_an_object() -> None:
    with pytest.raises(ParsingError, match=r"Expected a get document"):
        GetResponse.from_document(["_id"])


def test_get_response_from_xcontent() -> None:
    parser = XContentParser(io.BytesIO(b'{"_index": "index", "_id": "1", "fields": {"a": [1]}}'))
    response = GetResponse.from_xcontent(parser)
    assert response.fields == {"a": [1]}
