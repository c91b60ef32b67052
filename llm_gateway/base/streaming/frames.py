"""Frame decoders for the two stream encodings vendors use.

- Server-sent events: ``data:`` lines accumulate until a blank line
  dispatches the event; ``event:``, ``id:``, ``retry:`` and ``:`` comment
  lines carry nothing the gateway needs. A trailing event without the final
  blank line is still dispatched at end of input.
- NDJSON: one JSON document per non-empty line.

Both yield the raw frame text; JSON decoding and classification belong to
the adapter.
"""

from __future__ import annotations

from typing import Iterable, Iterator, List


def iter_sse_data(lines: Iterable[str]) -> Iterator[str]:
    """Yield the ``data`` payload of each server-sent event."""
    pending: List[str] = []
    for raw in lines:
        line = raw.rstrip("\r\n")
        if not line:
            if pending:
                yield "\n".join(pending)
                pending = []
            continue
        if line.startswith(":"):
            continue
        name, _, value = line.partition(":")
        if value.startswith(" "):
            value = value[1:]
        if name == "data":
            pending.append(value)
    if pending:
        yield "\n".join(pending)


def iter_ndjson(lines: Iterable[str]) -> Iterator[str]:
    """Yield each non-blank line of a newline-delimited JSON stream."""
    for raw in lines:
        line = raw.strip()
        if line:
            yield line


__all__ = ["iter_sse_data", "iter_ndjson"]
