# -*- coding: utf-8 -*-
"""
Test request context.

Parameter merging, boolean flags and transport detection.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

import pytest
from starlette.requests import Request

from crudadmin.core.flash import FlashCategory, SessionFlashBag
from crudadmin.core.request import RequestContext, to_bool


def test_to_bool() -> None:
    assert to_bool("1") is True
    assert to_bool("on") is True
    assert to_bool("anything") is True
    assert to_bool("0") is False
    assert to_bool("false") is False
    assert to_bool("") is False
    assert to_bool(["", "1"]) is True
    assert to_bool(None) is False


def test_merge_items_collects_lists() -> None:
    params: dict = {}
    RequestContext.merge_items(
        [("idx[]", "1"), ("idx[]", "2"), ("a", "x"), ("a", "y"), ("single", "z")],
        params,
    )

    assert params == {"idx": ["1", "2"], "a": ["x", "y"], "single": "z"}


def test_get_list_drops_blank_values() -> None:
    request = RequestContext(params={"idx": ["1", "", "3"], "one": "5", "blank": ""})

    assert request.get_list("idx") == ["1", "3"]
    assert request.get_list("one") == ["5"]
    assert request.get_list("blank") == []
    assert request.get_list("missing") == []


def test_asynchronous_detection() -> None:
    ajax = RequestContext(headers={"X-Requested-With": "XMLHttpRequest"})
    flagged = RequestContext(params={"_xml_http_request": "true"})
    plain = RequestContext(params={"_xml_http_request": "0"})

    assert ajax.is_xml_http_request()
    assert ajax.is_asynchronous("_xml_http_request")
    assert flagged.is_asynchronous("_xml_http_request")
    assert not flagged.is_xml_http_request()
    assert not plain.is_asynchronous("_xml_http_request")


@pytest.mark.asyncio
async def test_from_request_merges_query_path_and_extra() -> None:
    request = Request(
        {
            "type": "http",
            "method": "get",
            "path": "/article/3/edit",
            "query_string": b"idx[]=1&idx[]=2&id=9&_sonata_admin=spoofed",
            "headers": [(b"x-requested-with", b"XMLHttpRequest")],
            "path_params": {"id": "3"},
        }
    )

    context = await RequestContext.from_request(request, extra={"_sonata_admin": "article"})

    assert context.method == "GET"
    assert context.get("idx") == ["1", "2"]
    assert context.get("id") == "3"
    assert context.get("_sonata_admin") == "article"
    assert context.is_xml_http_request()
    assert context.session == {}


def test_session_flash_bag() -> None:
    session: dict = {}
    bag = SessionFlashBag(session)

    bag.set_flash(FlashCategory.SUCCESS, "flash_create_success")
    bag.set_flash(FlashCategory.SUCCESS, "flash_edit_success")

    assert bag.peek(FlashCategory.SUCCESS) == ["flash_create_success", "flash_edit_success"]
    assert bag.pop_all() == {
        FlashCategory.SUCCESS: ["flash_create_success", "flash_edit_success"]
    }
    assert session == {}


# The End
