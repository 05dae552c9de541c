from __future__ import annotations

import json
from pathlib import Path

import pytest

from conftest import FIXED_NOW
from stitch_mcp import (
    FilesystemStore,
    MemoryStore,
    NotFound,
    UnsupportedURI,
    get_project,
    get_screen,
    read_resource,
    resolve_resource,
)


@pytest.fixture
def sample() -> MemoryStore:
    return MemoryStore(now=FIXED_NOW)


def test_resolve_project_uri_matches_get_project(sample: MemoryStore) -> None:
    assert resolve_resource(sample, "stitch:project/p_travel") == get_project(sample, "p_travel")


def test_resolve_screen_uri_matches_get_screen(sample: MemoryStore) -> None:
    assert resolve_resource(sample, "stitch:project/p_travel/screen/s1") == get_screen(sample, "p_travel", "s1")


@pytest.mark.parametrize(
    "uri",
    [
        "stitch:bogus/thing",
        "stitch:project/",
        "stitch:project/p_travel/",
        "stitch:project/p_travel/screen/",
        "stitch:project/p_travel/screen/s1/extra",
        "stitch://project/p_travel",
        "xstitch:project/p_travel",
    ],
)
def test_resolve_unsupported_uri(sample: MemoryStore, uri: str) -> None:
    with pytest.raises(UnsupportedURI) as ei:
        resolve_resource(sample, uri)
    assert ei.value.code == "unsupported_uri"
    assert ei.value.data == {"uri": uri}


def test_resolve_unknown_ids_are_not_found(sample: MemoryStore) -> None:
    with pytest.raises(NotFound):
        resolve_resource(sample, "stitch:project/nope")
    with pytest.raises(NotFound) as ei:
        resolve_resource(sample, "stitch:project/p_travel/screen/nope")
    assert ei.value.data == {"projectId": "p_travel", "screenId": "nope"}


def test_read_resource_wraps_payload(projects_dir: Path) -> None:
    store = FilesystemStore(projects_dir)
    out = read_resource(store, "stitch:project/parked")
    (content,) = out["contents"]
    assert content["uri"] == "stitch:project/parked"
    assert content["mimeType"] == "application/json"
    assert content["data"] == get_project(store, "parked").to_dict()
    json.dumps(out)


def test_error_serializes_as_json_object(sample: MemoryStore) -> None:
    with pytest.raises(UnsupportedURI) as ei:
        resolve_resource(sample, "stitch:bogus/thing")
    assert json.loads(str(ei.value)) == {
        "code": "unsupported_uri",
        "message": "Unsupported URI pattern",
        "data": {"uri": "stitch:bogus/thing"},
    }
