"""Response Envelope — merges dtoOut with the uuAppErrorMap.

Invariants:
    - uuAppErrorMap is always present, empty on success
    - Pure function: inputs are never mutated
"""

from typing import Any, Mapping

from shoplist.core.errors import ErrorEntry

ERROR_MAP_FIELD = "uuAppErrorMap"


def build_response(
    dto_out: Mapping[str, Any] | None = None,
    error_map: Mapping[str, ErrorEntry | dict] | None = None,
) -> dict:
    """Build the flat response body {...dtoOut, uuAppErrorMap}."""
    serialized = {
        key: entry.to_dict() if isinstance(entry, ErrorEntry) else dict(entry)
        for key, entry in (error_map or {}).items()
    }
    return {**(dto_out or {}), ERROR_MAP_FIELD: serialized}
