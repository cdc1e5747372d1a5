"""Object Storage — uploads with progress events, public URLs and removal.

Invariants:
    - UploadOperation emits progress events with non-decreasing percent (0-100)
    - Exactly one terminal event per upload: done (with public_url) or failed
    - A successful upload always reports percent=100 before done
    - cancel() aborts the in-flight upload; the terminal event is failed("Upload cancelled")
    - An operation cancelled before start() never sends a request
    - Request body is re-iterable so the retry wrapper can resend it

Design Decisions:
    - Progress as an async iterator over an asyncio.Queue fed by the upload task,
      instead of an onUploadProgress callback
    - Percent computed from bytes handed to the transport, not server acknowledgements
    - Object names are {folder}/{uuid4}.{ext}: no collisions, original name not leaked
"""

import asyncio
import logging
import uuid
from collections.abc import AsyncIterator, Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal

from seminary_site.core.error_messages import describe_error
from seminary_site.core.errors import ErrorContext, UploadError

if TYPE_CHECKING:
    from seminary_site.infrastructure.backend_client import HostedBackendClient

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 64 * 1024
CANCELLED_MESSAGE = "Upload cancelled"


def new_object_path(folder: str, filename: str) -> str:
    """Unique object path keeping only the original extension."""
    _, dot, ext = filename.rpartition(".")
    suffix = f".{ext.lower()}" if dot and ext else ""
    return f"{folder.strip('/')}/{uuid.uuid4()}{suffix}"


@dataclass(frozen=True)
class UploadEvent:
    """One step of an upload: progress, done or failed."""
    kind: Literal["progress", "done", "failed"]
    percent: int
    public_url: str | None = None
    error: str | None = None

    @property
    def terminal(self) -> bool:
        return self.kind != "progress"

    def to_sse_event(self) -> dict:
        data: dict = {"percent": self.percent}
        if self.public_url is not None:
            data["public_url"] = self.public_url
        if self.error is not None:
            data["message"] = self.error
        return {"type": f"upload_{self.kind}", "data": data}


class _ProgressBody:
    """Async-iterable request body reporting bytes sent; re-iterable per attempt."""

    def __init__(self, data: bytes, chunk_size: int, report: Callable[[int], None]):
        self._data = data
        self._chunk_size = max(1, chunk_size)
        self._report = report

    def __aiter__(self) -> AsyncIterator[bytes]:
        return self._chunks()

    async def _chunks(self) -> AsyncIterator[bytes]:
        total = len(self._data)
        if total == 0:
            self._report(100)
            return
        sent = 0
        for start in range(0, total, self._chunk_size):
            chunk = self._data[start:start + self._chunk_size]
            yield chunk
            sent += len(chunk)
            self._report(round(sent * 100 / total))


class UploadOperation:
    """A cancellable upload that yields UploadEvents when iterated."""

    def __init__(
        self,
        bucket: "StorageBucket",
        path: str,
        data: bytes,
        content_type: str,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ):
        self.bucket = bucket
        self.path = path
        self._data = data
        self._content_type = content_type
        self._chunk_size = chunk_size
        self._queue: asyncio.Queue[UploadEvent] = asyncio.Queue()
        self._task: asyncio.Task | None = None
        self._last_percent = -1
        self._finished: UploadEvent | None = None

    @property
    def done(self) -> bool:
        """True once the terminal event has been emitted."""
        return self._finished is not None

    def start(self) -> "UploadOperation":
        if self._task is None and self._finished is None:
            self._emit_progress(0)
            self._task = asyncio.create_task(self._run())
            self._task.add_done_callback(self._on_done)
        return self

    def cancel(self) -> None:
        if self._task is None:
            self._emit(UploadEvent("failed", max(self._last_percent, 0), error=CANCELLED_MESSAGE))
            return
        self._task.cancel()

    async def __aiter__(self) -> AsyncIterator[UploadEvent]:
        self.start()
        while True:
            event = await self._queue.get()
            yield event
            if event.terminal:
                return

    async def result(self) -> str:
        """Wait for completion; returns the public URL or raises UploadError."""
        if self._finished is None:
            async for _ in self:
                pass
        if self._finished is None or self._finished.kind != "done":
            message = self._finished.error if self._finished else CANCELLED_MESSAGE
            raise UploadError(
                message or CANCELLED_MESSAGE, self.bucket.name,
                context=ErrorContext(resource=self.bucket.name, record_id=self.path),
            )
        return self._finished.public_url or ""

    async def _run(self) -> str:
        body = _ProgressBody(self._data, self._chunk_size, self._emit_progress)
        await self.bucket.put_object(self.path, body, len(self._data), self._content_type)
        return self.bucket.get_public_url(self.path)

    def _on_done(self, task: asyncio.Task) -> None:
        if task.cancelled():
            logger.warning(
                "Upload cancelled",
                extra={"bucket": self.bucket.name, "object_path": self.path},
            )
            self._emit(UploadEvent("failed", max(self._last_percent, 0), error=CANCELLED_MESSAGE))
            return
        error = task.exception()
        if error is not None:
            logger.error(
                f"Upload failed: {error}",
                extra={"bucket": self.bucket.name, "object_path": self.path},
            )
            self._emit(UploadEvent(
                "failed", max(self._last_percent, 0), error=describe_error(error),
            ))
            return
        self._emit_progress(100)
        self._emit(UploadEvent("done", 100, public_url=task.result()))

    def _emit_progress(self, percent: int) -> None:
        percent = min(100, max(0, percent))
        if percent > self._last_percent:
            self._last_percent = percent
            self._emit(UploadEvent("progress", percent))

    def _emit(self, event: UploadEvent) -> None:
        if self._finished is not None:
            return
        if event.terminal:
            self._finished = event
        self._queue.put_nowait(event)


class StorageBucket:
    """One storage bucket on the hosted backend."""

    def __init__(
        self,
        backend: "HostedBackendClient",
        name: str,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        access_token: str | None = None,
    ):
        self._backend = backend
        self.name = name
        self.chunk_size = chunk_size
        self._access_token = access_token

    def upload(self, path: str, data: bytes, content_type: str = "application/octet-stream") -> UploadOperation:
        """Create an upload; it starts when iterated, awaited via result(), or start()ed."""
        return UploadOperation(self, path, data, content_type, self.chunk_size)

    async def put_object(self, path: str, body, size: int, content_type: str) -> None:
        await self._backend.request(
            "POST", f"/storage/v1/object/{self.name}/{path}",
            content=body,
            headers={
                "Content-Type": content_type,
                "Content-Length": str(size),
                "x-upsert": "false",
            },
            resource=self.name,
            access_token=self._access_token,
        )
        logger.info(
            "Uploaded object", extra={"bucket": self.name, "object_path": path},
        )

    def get_public_url(self, path: str) -> str:
        return f"{self._backend.base_url}/storage/v1/object/public/{self.name}/{path}"

    def path_from_public_url(self, url: str) -> str | None:
        """Object path for a public URL of this bucket, or None if it is foreign."""
        marker = f"/storage/v1/object/public/{self.name}/"
        _, found, path = url.partition(marker)
        return path or None if found else None

    async def remove(self, paths: list[str]) -> None:
        if not paths:
            return
        await self._backend.request(
            "DELETE", f"/storage/v1/object/{self.name}",
            json={"prefixes": paths},
            resource=self.name,
            access_token=self._access_token,
        )


class StorageClient:
    """Bucket factory bound to one backend client."""

    def __init__(self, backend: "HostedBackendClient", chunk_size: int = DEFAULT_CHUNK_SIZE):
        self._backend = backend
        self.chunk_size = chunk_size

    def bucket(self, name: str, access_token: str | None = None) -> StorageBucket:
        return StorageBucket(self._backend, name, self.chunk_size, access_token)
