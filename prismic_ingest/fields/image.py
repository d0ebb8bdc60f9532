import asyncio
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any
from urllib.parse import unquote

from prismic_ingest.fields.base import FieldTypeResolver
from prismic_ingest.materialization.environment import RemoteFileRequest, maybe_await
from prismic_ingest.schema import shared
from prismic_ingest.schema.context import CompileContext
from prismic_ingest.schema.models import FieldDescriptor, FieldType, ImageField

if TYPE_CHECKING:
    from prismic_ingest.materialization.engine import DocumentWalker
    from prismic_ingest.schema.compiler import SchemaCompiler

THUMBNAILS_SEGMENT = "thumbnails"


class ImageFieldResolver(FieldTypeResolver):
    """Images and their thumbnails, optionally downloaded to a local file."""

    def compile(
        self,
        name: str,
        descriptor: FieldDescriptor,
        context: CompileContext,
        compiler: "SchemaCompiler",
    ) -> FieldType:
        image_context = context.child(name)
        type_name = compiler.namer.shared(shared.IMAGE)
        compiler.register(image_context.path, type_name)
        thumbnails = descriptor.thumbnails if isinstance(descriptor, ImageField) else ()
        thumbnail_type = compiler.namer.shared(shared.IMAGE_THUMBNAIL)
        for thumbnail in thumbnails:
            thumbnail_path = image_context.path + (THUMBNAILS_SEGMENT, thumbnail.name)
            compiler.register(thumbnail_path, thumbnail_type)
        return FieldType(type_name)

    async def materialize(
        self,
        key: str,
        value: Any,
        path: tuple[str, ...],
        walker: "DocumentWalker",
    ) -> Any:
        if not isinstance(value, Mapping):
            return value
        thumbnail_names = [
            entry.path[-1]
            for entry in walker.registry.children(path + (THUMBNAILS_SEGMENT,))
            if entry.path[-1] in value
        ]
        image, *thumbnails = await asyncio.gather(
            self._with_local_file(key, value, path, walker),
            *(
                self._with_local_file(name, value[name], path + (THUMBNAILS_SEGMENT, name), walker)
                for name in thumbnail_names
            ),
        )
        image.update(zip(thumbnail_names, thumbnails))
        return image

    async def _with_local_file(
        self,
        key: str,
        value: Any,
        path: tuple[str, ...],
        walker: "DocumentWalker",
    ) -> Any:
        if not isinstance(value, Mapping):
            return value
        environment = walker.environment
        local_file = None
        try:
            url = value.get("url")
            wanted = await maybe_await(
                environment.should_normalize_image(walker.field_context(key, value))
            )
            if wanted and url:
                local_file = await environment.remote_file_fetcher(
                    RemoteFileRequest(url=unquote(url), parent_node_id=walker.document_node_id)
                )
        except Exception as exc:
            walker.report(path, exc)
        return {**value, "localFile": local_file}
