from __future__ import annotations

import pytest

from hirest.core.converters import convert_exists_response
from tests.helpers import create_response

#############################################
#     Tests for convert_exists_response     #
#############################################


def test_convert_exists_response_200() -> None:
    assert convert_exists_response(create_response(200, json={"_id": "1", "found": True}))


def test_convert_exists_response_200_without_body() -> None:
    assert convert_exists_response(create_response(200, method="HEAD"))


@pytest.mark.parametrize("status_code", [201, 204, 404, 500])
def test_convert_exists_response_not_200(status_code: int) -> None:
    assert not convert_exists_response(create_response(status_code))
