"""Rendering of Prismic rich text values (lists of blocks with spans)."""

from collections.abc import Mapping, Sequence
from html import escape
from typing import Any

from prismic_ingest.materialization.environment import HtmlSerializer, LinkResolver

_BLOCK_TAGS = {
    "heading1": "h1",
    "heading2": "h2",
    "heading3": "h3",
    "heading4": "h4",
    "heading5": "h5",
    "heading6": "h6",
    "paragraph": "p",
    "preformatted": "pre",
    "list-item": "li",
    "o-list-item": "li",
}
_LIST_GROUPS = {"list-item": "group-list-item", "o-list-item": "group-o-list-item"}
_GROUP_TAGS = {"group-list-item": "ul", "group-o-list-item": "ol"}
_SPAN_TAGS = {"strong": "strong", "em": "em"}


def link_url(
    link: Mapping[str, Any] | None, link_resolver: LinkResolver | None = None
) -> str | None:
    """Resolve a link value to a URL. Document links go through ``link_resolver``."""
    if not link:
        return None
    if link.get("link_type") == "Document":
        return link_resolver(link) if link_resolver else None
    return link.get("url")


def as_text(blocks: Sequence[Mapping[str, Any]] | None, separator: str = " ") -> str:
    return separator.join(block["text"] for block in blocks or () if block.get("text"))


def as_html(
    blocks: Sequence[Mapping[str, Any]] | None,
    link_resolver: LinkResolver | None = None,
    html_serializer: HtmlSerializer | None = None,
) -> str:
    """Render blocks to HTML.

    ``html_serializer`` is offered every element first (blocks, list groups,
    spans and plain text runs); returning None falls back to the default
    markup.
    """
    return _HtmlRenderer(link_resolver, html_serializer).render(blocks or ())


def _group_list_items(
    blocks: Sequence[Mapping[str, Any]],
) -> list[tuple[str | None, list[Mapping[str, Any]]]]:
    groups: list[tuple[str | None, list[Mapping[str, Any]]]] = []
    for block in blocks:
        group_type = _LIST_GROUPS.get(block.get("type", ""))
        if group_type is not None and groups and groups[-1][0] == group_type:
            groups[-1][1].append(block)
        else:
            groups.append((group_type, [block]))
    return groups


class _HtmlRenderer:
    def __init__(
        self,
        link_resolver: LinkResolver | None,
        html_serializer: HtmlSerializer | None,
    ) -> None:
        self._link_resolver = link_resolver
        self._html_serializer = html_serializer

    def render(self, blocks: Sequence[Mapping[str, Any]]) -> str:
        parts: list[str] = []
        for index, (group_type, items) in enumerate(_group_list_items(blocks)):
            if group_type is None:
                parts.append(self._block(items[0], index))
                continue
            children = "".join(self._block(item, i) for i, item in enumerate(items))
            element = {"type": group_type, "items": items}
            parts.append(self._serialize(group_type, element, None, children, index))
        return "".join(parts)

    def _block(self, block: Mapping[str, Any], index: int) -> str:
        text = block.get("text") or ""
        spans = block.get("spans") or []
        children = self._spans(text, spans)
        return self._serialize(block.get("type", ""), block, block.get("text"), children, index)

    def _spans(self, text: str, spans: Sequence[Mapping[str, Any]]) -> str:
        ordered = sorted(spans, key=lambda span: (span["start"], -span["end"]))
        return self._render_range(text, 0, len(text), ordered)

    def _render_range(
        self, text: str, start: int, end: int, spans: Sequence[Mapping[str, Any]]
    ) -> str:
        parts: list[str] = []
        cursor = start
        i = 0
        while i < len(spans):
            span = spans[i]
            span_end = min(span["end"], end)
            nested: list[Mapping[str, Any]] = []
            i += 1
            while i < len(spans) and spans[i]["start"] < span_end:
                nested.append(spans[i])
                i += 1
            parts.append(self._text(text[cursor : span["start"]]))
            children = self._render_range(text, span["start"], span_end, nested)
            content = text[span["start"] : span_end]
            parts.append(self._serialize(span["type"], span, content, children, 0))
            cursor = span_end
        parts.append(self._text(text[cursor:end]))
        return "".join(parts)

    def _text(self, chunk: str) -> str:
        if not chunk:
            return ""
        rendered = escape(chunk).replace("\n", "<br />")
        return self._serialize("span", {"type": "span", "text": chunk}, chunk, rendered, 0)

    def _serialize(
        self,
        element_type: str,
        element: Mapping[str, Any],
        content: str | None,
        children: str,
        index: int,
    ) -> str:
        if self._html_serializer is not None:
            custom = self._html_serializer(element_type, element, content, children, index)
            if custom is not None:
                return custom
        return self._default(element_type, element, children)

    def _default(self, element_type: str, element: Mapping[str, Any], children: str) -> str:
        if element_type in _BLOCK_TAGS:
            tag = _BLOCK_TAGS[element_type]
            label = element.get("label")
            attrs = f' class="{escape(label)}"' if label else ""
            return f"<{tag}{attrs}>{children}</{tag}>"
        if element_type in _GROUP_TAGS:
            tag = _GROUP_TAGS[element_type]
            return f"<{tag}>{children}</{tag}>"
        if element_type in _SPAN_TAGS:
            tag = _SPAN_TAGS[element_type]
            return f"<{tag}>{children}</{tag}>"
        if element_type == "hyperlink":
            return self._hyperlink(element.get("data") or {}, children)
        if element_type == "label":
            label = (element.get("data") or {}).get("label", "")
            return f'<span class="{escape(label)}">{children}</span>'
        if element_type == "image":
            return self._image(element)
        if element_type == "embed":
            return self._embed(element.get("oembed") or {})
        return children

    def _hyperlink(self, data: Mapping[str, Any], children: str) -> str:
        url = link_url(data, self._link_resolver) or ""
        target = data.get("target")
        target_attrs = f' target="{escape(target)}" rel="noopener"' if target else ""
        return f'<a href="{escape(url)}"{target_attrs}>{children}</a>'

    def _image(self, element: Mapping[str, Any]) -> str:
        url = escape(element.get("url") or "")
        alt = escape(element.get("alt") or "")
        copyright_attr = (
            f' copyright="{escape(element["copyright"])}"' if element.get("copyright") else ""
        )
        img = f'<img src="{url}" alt="{alt}"{copyright_attr} />'
        link_to = element.get("linkTo")
        if link_to:
            href = escape(link_url(link_to, self._link_resolver) or "")
            img = f'<a href="{href}">{img}</a>'
        return f'<p class="block-img">{img}</p>'

    @staticmethod
    def _embed(oembed: Mapping[str, Any]) -> str:
        return (
            f'<div data-oembed="{escape(oembed.get("embed_url") or "")}" '
            f'data-oembed-type="{escape(oembed.get("type") or "")}" '
            f'data-oembed-provider="{escape(oembed.get("provider_name") or "")}">'
            f'{oembed.get("html") or ""}</div>'
        )
