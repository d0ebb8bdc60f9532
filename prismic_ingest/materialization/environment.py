"""Collaborators threaded, read-only, through one materialization walk."""

import inspect
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from typing import Any, TypeVar

from prismic_ingest.config.settings import Settings


@dataclass(frozen=True)
class FieldContext:
    """What the per-field hooks get to see: the raw field and its document."""

    key: str
    value: Any
    node: Mapping[str, Any]


@dataclass(frozen=True)
class RemoteFileRequest:
    url: str
    parent_node_id: str | None = None


@dataclass(frozen=True)
class FieldError:
    """A field that degraded to an empty value during materialization."""

    path: tuple[str, ...]
    error: Exception


LinkResolver = Callable[[Mapping[str, Any]], str | None]
# (element type, element, text content, rendered children, index) -> html or None
HtmlSerializer = Callable[[str, Mapping[str, Any], str | None, str, int], str | None]

LinkResolverFactory = Callable[[FieldContext], LinkResolver | None]
HtmlSerializerFactory = Callable[[FieldContext], HtmlSerializer | None]
ImagePredicate = Callable[[FieldContext], bool | Awaitable[bool]]
RemoteFileFetcher = Callable[[RemoteFileRequest], Awaitable[str | None]]
DocumentNodeIdBuilder = Callable[[str, str], str]


def replace_dashes(field_name: str) -> str:
    return field_name.replace("-", "_")


def no_link_resolver(context: FieldContext) -> LinkResolver | None:
    return None


def no_html_serializer(context: FieldContext) -> HtmlSerializer | None:
    return None


def always(context: FieldContext) -> bool:
    return True


def never(context: FieldContext) -> bool:
    return False


@dataclass(frozen=True)
class ProxyEnvironment:
    remote_file_fetcher: RemoteFileFetcher
    document_node_id_builder: DocumentNodeIdBuilder
    transform_field_name: Callable[[str], str] = replace_dashes
    link_resolver: LinkResolverFactory = no_link_resolver
    html_serializer: HtmlSerializerFactory = no_html_serializer
    should_normalize_image: ImagePredicate = always
    type_prefix: str = ""
    on_field_error: Callable[[FieldError], None] | None = None


def build_environment(
    settings: Settings,
    *,
    remote_file_fetcher: RemoteFileFetcher,
    document_node_id_builder: DocumentNodeIdBuilder,
    link_resolver: LinkResolverFactory | None = None,
    html_serializer: HtmlSerializerFactory | None = None,
    transform_field_name: Callable[[str], str] | None = None,
    on_field_error: Callable[[FieldError], None] | None = None,
) -> ProxyEnvironment:
    """Build the environment for an ingestion run from application settings."""
    return ProxyEnvironment(
        remote_file_fetcher=remote_file_fetcher,
        document_node_id_builder=document_node_id_builder,
        transform_field_name=transform_field_name or replace_dashes,
        link_resolver=link_resolver or no_link_resolver,
        html_serializer=html_serializer or no_html_serializer,
        should_normalize_image=always if settings.normalize_images else never,
        type_prefix=settings.type_prefix,
        on_field_error=on_field_error,
    )


_T = TypeVar("_T")


async def maybe_await(value: _T | Awaitable[_T]) -> _T:
    """Await ``value`` if a hook returned an awaitable, otherwise return it."""
    if inspect.isawaitable(value):
        return await value
    return value
