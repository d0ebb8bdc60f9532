import asyncio
import hashlib
import mimetypes
from pathlib import Path, PurePosixPath
from urllib.parse import urlsplit

import httpx

from prismic_ingest.config.settings import Settings
from prismic_ingest.logging.logger import Log
from prismic_ingest.materialization.environment import RemoteFileRequest
from prismic_ingest.materialization.exceptions import RemoteFileFetchError
from prismic_ingest.nodes.ids import NodeIdBuilder
from prismic_ingest.nodes.models import FileNode
from prismic_ingest.nodes.store import NodeStore

FILE_NODE_TYPE = "File"


class HttpxRemoteFileFetcher:
    """Downloads remote files into a local cache and registers a File node for each.

    Downloads are bounded by ``max_concurrency`` and ``timeout_seconds``.
    Requests for a URL that is already being fetched (or was fetched) share
    the same result.
    """

    def __init__(
        self,
        *,
        client: httpx.AsyncClient,
        cache_dir: Path,
        node_ids: NodeIdBuilder,
        node_store: NodeStore | None = None,
        max_concurrency: int = 4,
        timeout_seconds: float = 30,
    ) -> None:
        self._client = client
        self._cache_dir = cache_dir
        self._node_ids = node_ids
        self._node_store = node_store
        self._timeout = timeout_seconds
        self._semaphore = asyncio.Semaphore(max_concurrency)
        self._downloads: dict[str, asyncio.Task[FileNode]] = {}

    async def __call__(self, request: RemoteFileRequest) -> str:
        """Return the id of the File node for ``request.url``.

        Raises:
            RemoteFileFetchError: if the download or the cache write fails.
        """
        task = self._downloads.get(request.url)
        if task is None:
            task = asyncio.ensure_future(self._download(request))
            self._downloads[request.url] = task
        file_node = await asyncio.shield(task)
        return file_node.id

    async def _download(self, request: RemoteFileRequest) -> FileNode:
        async with self._semaphore:
            Log.debug(f"Downloading {request.url}")
            try:
                response = await self._client.get(
                    request.url, follow_redirects=True, timeout=self._timeout
                )
                response.raise_for_status()
            except httpx.HTTPError as exc:
                self._downloads.pop(request.url, None)
                raise RemoteFileFetchError(f"Failed to download {request.url}: {exc}") from exc

        content_type = response.headers.get("content-type")
        path = self._cache_dir / self._file_name(request.url, content_type)
        try:
            await asyncio.to_thread(self._store, path, response.content)
        except OSError as exc:
            self._downloads.pop(request.url, None)
            raise RemoteFileFetchError(f"Failed to store {request.url} at {path}: {exc}") from exc

        file_node = FileNode(
            id=self._node_ids.create(f"{FILE_NODE_TYPE} {request.url}"),
            url=request.url,
            path=path,
            parent_node_id=request.parent_node_id,
            content_type=content_type,
            size=len(response.content),
        )
        if self._node_store is not None:
            self._node_store.add(file_node.id, file_node, FILE_NODE_TYPE)
        Log.info(f"Stored {request.url} ({file_node.size} bytes) as {path.name}")
        return file_node

    @staticmethod
    def _store(path: Path, content: bytes) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)

    @staticmethod
    def _file_name(url: str, content_type: str | None) -> str:
        digest = hashlib.sha256(url.encode("utf-8")).hexdigest()
        suffix = PurePosixPath(urlsplit(url).path).suffix
        if not suffix and content_type:
            suffix = mimetypes.guess_extension(content_type.split(";")[0].strip()) or ""
        return f"{digest}{suffix}"


def build_remote_file_fetcher(
    settings: Settings,
    client: httpx.AsyncClient,
    node_store: NodeStore | None = None,
) -> HttpxRemoteFileFetcher:
    return HttpxRemoteFileFetcher(
        client=client,
        cache_dir=Path(settings.remote_file_cache_dir),
        node_ids=NodeIdBuilder(settings.node_id_namespace),
        node_store=node_store,
        max_concurrency=settings.remote_file_max_concurrency,
        timeout_seconds=settings.remote_file_timeout_seconds,
    )