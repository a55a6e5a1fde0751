"""Archive builder for reservation exports.

Packs retrieved PDFs into one in-memory ZIP.
"""

import io
import zipfile
from dataclasses import dataclass
from typing import Dict, Iterable

from reszip.core.batch.models import FetchSuccess
from reszip.core.errors import ArchiveError
from reszip.core.logging import logger

# Fixed metadata keeps the archive byte-identical for identical input
_FIXED_DATE_TIME = (1980, 1, 1, 0, 0, 0)
_FILE_MODE = 0o644 << 16


@dataclass(frozen=True)
class ArchiveEntry:
    """A named file inside the output archive."""

    filename: str
    content: bytes

    @classmethod
    def from_outcome(cls, outcome: FetchSuccess) -> "ArchiveEntry":
        return cls(filename=outcome.filename, content=outcome.content)


class ArchiveBuilder:
    """Builds a deterministic ZIP archive from named byte buffers."""

    def __init__(self, compression: int = zipfile.ZIP_DEFLATED):
        self.compression = compression

    def build(self, entries: Iterable[ArchiveEntry]) -> bytes:
        """Write entries into a ZIP and return its bytes.

        Entries are written in filename order; a repeated filename keeps the
        last entry. Zero entries produce a valid empty archive.

        Raises:
            ArchiveError: If encoding fails
        """
        by_name: Dict[str, ArchiveEntry] = {}
        for entry in entries:
            by_name[entry.filename] = entry

        buffer = io.BytesIO()
        try:
            with zipfile.ZipFile(buffer, mode="w", compression=self.compression) as archive:
                for filename in sorted(by_name):
                    info = zipfile.ZipInfo(filename=filename, date_time=_FIXED_DATE_TIME)
                    info.compress_type = self.compression
                    info.external_attr = _FILE_MODE
                    archive.writestr(info, by_name[filename].content)
        except (zipfile.BadZipFile, zipfile.LargeZipFile, OSError, ValueError) as e:
            logger.error("archive_build_failed", entries=len(by_name), error=str(e))
            raise ArchiveError(f"Failed to build archive: {e}") from e

        data = buffer.getvalue()
        logger.info("archive_built", entries=len(by_name), size_bytes=len(data))
        return data
