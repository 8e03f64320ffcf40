"""ZIP archive of source PDFs renamed after their MRN."""

import io
import zipfile
from typing import Dict, List, Sequence, Tuple

from dvi_extractor.schema import DocumentResult

DEFAULT_ARCHIVE_NAME = "DVI_PDFs_Renamed.zip"


def archive_names(results: Sequence[DocumentResult]) -> List[str]:
    """
    File name per document: '<MRN>.pdf', or 'Unknown_MRN_<row>.pdf' without
    an MRN. A repeated name gets '_2', '_3', ... before the extension.
    """
    used: Dict[str, int] = {}
    names = []
    for i, result in enumerate(results, 1):
        base = result.record.declaration_ref or f"Unknown_MRN_{i}"
        if base in used:
            used[base] += 1
            base = f"{base}_{used[base]}"
        else:
            used[base] = 1
        names.append(f"{base}.pdf")
    return names


def build_archive(entries: Sequence[Tuple[DocumentResult, bytes]]) -> bytes:
    """
    Zip each document's PDF bytes under its renamed file name.

    Args:
        entries: (result, original PDF bytes) pairs in table order

    Returns:
        The ZIP file content
    """
    names = archive_names([result for result, _ in entries])

    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, 'w', compression=zipfile.ZIP_DEFLATED) as archive:
        for name, (_, content) in zip(names, entries):
            archive.writestr(name, content)

    from dvi_extractor.utils import get_logger
    get_logger().info(f"ZIP archive built with {len(names)} file(s)")
    return buffer.getvalue()
