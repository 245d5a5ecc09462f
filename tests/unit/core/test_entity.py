from __future__ import annotations

import io
from unittest.mock import Mock

import pytest

from hirest.core.entity import Entity, XContentParser, XContentType, parse_entity
from hirest.exceptions import EntityError, ParsingError
from tests.helpers import create_response

############################
#     Tests for Entity     #
############################


def test_entity_from_response() -> None:
    response = create_response(200, json={"_id": "1"})
    entity = Entity.from_response(response)
    assert entity is not None
    assert entity.content == response.content
    assert entity.content_type == "application/json"


def test_entity_from_response_without_body() -> None:
    assert Entity.from_response(create_response(200)) is None


def test_entity_from_response_without_content_type() -> None:
    entity = Entity.from_response(create_response(200, content=b"{}"))
    assert entity == Entity(content=b"{}", content_type=None)


def test_entity_from_json() -> None:
    entity = Entity.from_json({"query": {"match_all": {}}})
    assert entity.content_type == "application/json"
    assert entity.content == b'{"query": {"match_all": {}}}'


##################################
#     Tests for XContentType     #
##################################


@pytest.mark.parametrize(
    "value",
    [
        "application/json",
        "application/json; charset=UTF-8",
        "Application/JSON",
        "json",
    ],
)
def test_xcontent_type_from_media_type_or_format_json(value: str) -> None:
    assert XContentType.from_media_type_or_format(value) is XContentType.JSON


@pytest.mark.parametrize("value", ["text/plain", "application/xml", "", "yaml", None])
def test_xcontent_type_from_media_type_or_format_unsupported(value: str | None) -> None:
    assert XContentType.from_media_type_or_format(value) is None


def test_xcontent_type_create_parser() -> None:
    with XContentType.JSON.create_parser(b'{"a": [1, 2]}') as parser:
        assert parser.map() == {"a": [1, 2]}
    assert parser.closed


###################################
#     Tests for XContentParser    #
###################################


def test_xcontent_parser_map_invalid_document() -> None:
    parser = XContentParser(io.BytesIO(b"{not json"))
    with pytest.raises(ParsingError, match=r"Failed to parse document"):
        parser.map()


def test_xcontent_parser_map_invalid_encoding() -> None:
    parser = XContentParser(io.BytesIO(b"\xff\xfe\xfa"))
    with pytest.raises(ParsingError):
        parser.map()


def test_xcontent_parser_context_manager_closes_stream() -> None:
    stream = io.BytesIO(b"{}")
    with XContentParser(stream):
        assert not stream.closed
    assert stream.closed


##################################
#     Tests for parse_entity     #
##################################


def test_parse_entity() -> None:
    entity = Entity(b'{"_id": "1", "found": true}', "application/json")
    assert parse_entity(entity, lambda parser: parser.map()) == {"_id": "1", "found": True}


def test_parse_entity_missing_entity() -> None:
    entity_parser = Mock()
    with pytest.raises(EntityError, match=r"Response body expected but not returned"):
        parse_entity(None, entity_parser)
    entity_parser.assert_not_called()


def test_parse_entity_missing_content_type() -> None:
    entity_parser = Mock()
    with pytest.raises(EntityError, match=r"\[Content-Type\] header"):
        parse_entity(Entity(b"{}"), entity_parser)
    entity_parser.assert_not_called()


def test_parse_entity_unsupported_content_type() -> None:
    entity_parser = Mock()
    with pytest.raises(EntityError, match=r"Unsupported Content-Type: text/html"):
        parse_entity(Entity(b"<html/>", "text/html"), entity_parser)
    entity_parser.assert_not_called()


def test_parse_entity_closes_parser_on_success() -> None:
    parsers: list[XContentParser] = []

    def entity_parser(parser: XContentParser) -> dict:
        parsers.append(parser)
        return parser.map()

    parse_entity(Entity(b"{}", "application/json"), entity_parser)
    assert len(parsers) == 1
    assert parsers[0].closed


def test_parse_entity_closes_parser_on_failure() -> None:
    parsers: list[XContentParser] = []

    def entity_parser(parser: XContentParser) -> dict:
        parsers.append(parser)
        return parser.map()

    with pytest.raises(ParsingError):
        parse_entity(Entity(b"{", "application/json"), entity_parser)
    assert parsers[0].closed
