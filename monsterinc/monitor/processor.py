"""Processing of fetched file content."""

from __future__ import annotations

import hashlib
import logging
from datetime import datetime, timezone

from monsterinc.models.monitored_file import MonitoredFileUpdate

_log = logging.getLogger("monsterinc.monitor.processor")


class Processor:
    """Hashes fetched content and packages it as an update."""

    def process_content(
        self, url: str, content: bytes | None, content_type: str
    ) -> MonitoredFileUpdate:
        """Compute the SHA-256 of ``content`` and return the update record."""
        if not content:
            _log.debug("Processing empty content for %s", url)
            content = b""
        digest = hashlib.sha256(content).hexdigest()
        update = MonitoredFileUpdate(
            url=url,
            new_hash=digest,
            content_type=content_type,
            fetched_at=datetime.now(timezone.utc),
            content=content,
        )
        _log.debug("Content of %s hashed to %s", url, digest)
        return update