#!/usr/bin/env python3
"""
httpstreaming Throttled Upload Example

Streams a file to a server at a capped rate while printing progress,
then downloads it back into memory through a progress-instrumented sink.

Usage:
    python examples/01_throttled_upload.py FILE URL
"""

import io
import sys
from pathlib import Path

from httpstreaming import ProgressStream, StreamingClient, ThrottledStream


def main(path: Path, url: str) -> None:
    """Upload at 64 KiB/s, then download with progress."""
    size = path.stat().st_size

    with StreamingClient() as client:
        # Upload: body is read from disk chunk by chunk, never held in memory
        with open(path, "rb") as f:
            body = ThrottledStream(f, bandwidth_limit=65536, size_hint=size)
            response = client.put(url, body=body, headers={"Content-Length": str(size)})
            body.close()
        print(f"✓ Uploaded {size}b: HTTP {response.status_code}")

        # Download: response chunks are written straight to the sink
        sink = ProgressStream(io.BytesIO(), size_hint=size)
        client.get(url, sink=sink)
        print(f"✓ Downloaded {sink.transferred_bytes}b")
        sink.close()


if __name__ == "__main__":
    main(Path(sys.argv[1]), sys.argv[2])
