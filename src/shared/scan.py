"""Batched iteration over a repository query.

Protean querysets are limited per call, so full scans walk the result set in
fixed-size batches using ``offset``. The query must carry a stable ordering.
"""

SCAN_BATCH_SIZE = 100


def scan(query, batch_size=SCAN_BATCH_SIZE):
    """Yield every record matched by ``query``, one batch at a time."""
    offset = 0
    while True:
        batch = query.offset(offset).limit(batch_size).all().items
        yield from batch
        if len(batch) < batch_size:
            return
        offset += batch_size
