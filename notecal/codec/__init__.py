"""Front-matter codec for event documents."""

from notecal.codec.frontmatter import (
    decode,
    derive_basename,
    encode,
    encode_from_calendar_event,
    join_document,
    merge_metadata,
    split_document,
)

__all__ = [
    "decode",
    "encode",
    "encode_from_calendar_event",
    "merge_metadata",
    "derive_basename",
    "split_document",
    "join_document",
]
