from collections.abc import Callable
from typing import Any

import pytest

from prismic_ingest.materialization.environment import ProxyEnvironment, RemoteFileRequest


class RecordingFetcher:
    """Remote file fetcher double that remembers every request it received."""

    def __init__(self) -> None:
        self.requests: list[RemoteFileRequest] = []

    async def __call__(self, request: RemoteFileRequest) -> str:
        self.requests.append(request)
        return f"file:{request.url}"


def readable_node_id(document_type: str, document_id: str) -> str:
    return f"{document_type} {document_id}"


@pytest.fixture()
def fetcher() -> RecordingFetcher:
    return RecordingFetcher()


@pytest.fixture()
def make_environment(fetcher: RecordingFetcher) -> Callable[..., ProxyEnvironment]:
    """Build a ProxyEnvironment with readable node ids and the recording fetcher."""

    def make(**overrides: Any) -> ProxyEnvironment:
        options: dict[str, Any] = {
            "remote_file_fetcher": fetcher,
            "document_node_id_builder": readable_node_id,
        }
        options.update(overrides)
        return ProxyEnvironment(**options)

    return make


@pytest.fixture()
def page_schema_json() -> dict[str, Any]:
    """A custom type using every field kind."""
    return {
        "Main": {
            "uid": {"type": "UID", "config": {"label": "UID"}},
            "title": {"type": "StructuredText", "config": {"single": "heading1"}},
            "subtitle": {"type": "Text"},
            "accent": {"type": "Color"},
            "layout": {"type": "Select", "config": {"options": ["wide", "narrow"]}},
            "rating": {"type": "Number"},
            "published_on": {"type": "Date"},
            "starts_at": {"type": "Timestamp"},
            "location": {"type": "GeoPoint"},
            "video": {"type": "Embed"},
            "hero": {
                "type": "Image",
                "config": {"thumbnails": [{"name": "mobile", "width": 320, "height": 240}]},
            },
            "related": {"type": "Link"},
        },
        "Content": {
            "cards": {
                "type": "Group",
                "config": {
                    "fields": {
                        "label": {"type": "Text"},
                        "cta-link": {"type": "Link"},
                    }
                },
            },
            "body": {
                "type": "Slices",
                "config": {
                    "choices": {
                        "quote": {
                            "type": "Slice",
                            "non-repeat": {"quote": {"type": "StructuredText"}},
                            "repeat": {"portrait": {"type": "Image"}},
                        }
                    }
                },
            },
        },
    }
