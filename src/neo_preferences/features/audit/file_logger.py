"""Audit logger that appends entries to a JSON lines file.

``log`` only queues; ``flush`` performs the file I/O in a worker thread.
A flush that fails puts its entries back at the front of the queue so the
next flush retries them.
"""

import asyncio
import logging
import threading
from pathlib import Path
from typing import List, Optional, Union

from ...config.constants import AuditDefaults
from ...core.entities import AuditLogEntry
from .in_memory_logger import InMemoryAuditLogger

logger = logging.getLogger(__name__)


class FileAuditLogger(InMemoryAuditLogger):
    """In-memory audit log mirrored to an append-only file."""

    def __init__(
        self,
        file_path: Union[str, Path],
        flush_interval: float = AuditDefaults.FLUSH_INTERVAL_SECONDS,
        max_entries: int = AuditDefaults.MAX_ENTRIES,
    ):
        super().__init__(max_entries=max_entries)
        self.file_path = Path(file_path)
        self.flush_interval = flush_interval
        self._write_queue: List[AuditLogEntry] = []
        self._queue_lock = threading.Lock()
        self._flush_task: Optional[asyncio.Task] = None

    def log(self, entry: AuditLogEntry) -> None:
        super().log(entry)
        with self._queue_lock:
            self._write_queue.append(entry)

    def clear(self) -> None:
        super().clear()
        with self._queue_lock:
            self._write_queue.clear()

    @property
    def pending(self) -> int:
        with self._queue_lock:
            return len(self._write_queue)

    def _append_lines(self, content: str) -> None:
        with self.file_path.open("a", encoding="utf-8") as handle:
            handle.write(content)

    async def flush(self) -> None:
        """Append queued entries to the file."""
        with self._queue_lock:
            batch, self._write_queue = self._write_queue, []

        if not batch:
            return

        content = "".join(entry.model_dump_json() + "\n" for entry in batch)
        try:
            await asyncio.to_thread(self._append_lines, content)
        except OSError as e:
            logger.error(f"Failed to write audit log {self.file_path}: {e}")
            with self._queue_lock:
                self._write_queue[:0] = batch

    def start(self) -> None:
        """Start periodic flushing on the running event loop."""
        if self._flush_task is not None and not self._flush_task.done():
            return
        self._flush_task = asyncio.get_running_loop().create_task(self._flush_loop())

    async def stop(self) -> None:
        """Stop periodic flushing and flush what is left."""
        task, self._flush_task = self._flush_task, None
        if task is not None:
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass

        await self.flush()

    async def _flush_loop(self) -> None:
        while True:
            await asyncio.sleep(self.flush_interval)
            await self.flush()
