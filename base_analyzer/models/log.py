from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict


class RawLog(BaseModel):
    """A receipt log exactly as the node returned it. Content is not trusted."""

    model_config = ConfigDict(frozen=True)

    address: str = ""
    topics: tuple[str, ...] = ()
    data: str = "0x"
    log_index: int | None = None

    @classmethod
    def from_rpc(cls, entry: dict[str, Any]) -> RawLog:
        topics = entry.get("topics") or []
        log_index = entry.get("logIndex")
        if isinstance(log_index, str):
            try:
                log_index = int(log_index, 16)
            except ValueError:
                log_index = None
        return cls(
            address=str(entry.get("address") or ""),
            topics=tuple(str(t) for t in topics if t is not None),
            data=str(entry.get("data") or "0x"),
            log_index=log_index if isinstance(log_index, int) else None,
        )
