"""
Receipt log decoder.

Turns each raw log into one typed event. Logs come from arbitrary third-party
contracts, so every topic and data word is validated before use and anything
that does not fit the expected shape becomes ``Unrecognized`` instead of
raising.
"""

from __future__ import annotations

import logging
import re
from decimal import Decimal
from typing import Callable, Iterable

from base_analyzer.decoding import signatures as sig
from base_analyzer.metrics.units import scale_amount
from base_analyzer.models.event import (
    DecodedEvent,
    LiquidityEvent,
    TokenTransfer,
    Unrecognized,
    YieldEvent,
)
from base_analyzer.models.log import RawLog
from base_analyzer.registry.address_registry import (
    DEFAULT_DECIMALS,
    AddressRegistry,
    load_registry,
)

logger = logging.getLogger(__name__)

_HEX_RE = re.compile(r"[0-9a-f]*")
_WORD_CHARS = 64
_ADDRESS_CHARS = 40
_ADDRESS_PADDING = "0" * (_WORD_CHARS - _ADDRESS_CHARS)


class _Malformed(Exception):
    """Raised inside the decoder when a recognized event has the wrong shape."""


def _strip_hex(value: object) -> str | None:
    if not isinstance(value, str):
        return None
    text = value.strip().lower()
    if text.startswith("0x"):
        text = text[2:]
    if not _HEX_RE.fullmatch(text):
        return None
    return text


def _parse_word(value: object) -> str | None:
    text = _strip_hex(value)
    if text is None or len(text) != _WORD_CHARS:
        return None
    return text


def _topic_address(topic: str) -> str:
    word = _parse_word(topic)
    if word is None:
        raise _Malformed(f"topic is not a 32-byte word: {topic!r}")
    if not word.startswith(_ADDRESS_PADDING):
        raise _Malformed(f"topic is not a left-padded address: {topic!r}")
    return "0x" + word[-_ADDRESS_CHARS:]


def _topic_uint(topic: str) -> int:
    word = _parse_word(topic)
    if word is None:
        raise _Malformed(f"topic is not a 32-byte word: {topic!r}")
    return int(word, 16)


def _data_uint(data: str) -> int:
    text = _strip_hex(data)
    if not text or len(text) > _WORD_CHARS:
        raise _Malformed(f"data is not a uint256: {data!r}")
    return int(text, 16)


def _data_words(data: str, count: int) -> list[int]:
    text = _strip_hex(data)
    if text is None or len(text) != _WORD_CHARS * count:
        raise _Malformed(f"expected {count} data words")
    return [int(text[i : i + _WORD_CHARS], 16) for i in range(0, len(text), _WORD_CHARS)]


def _require_topics(log: RawLog, count: int, event: str) -> None:
    if len(log.topics) != count:
        raise _Malformed(f"{event} with {len(log.topics)} topics, expected {count}")


def _decode_transfer(log: RawLog, contract: str, registry: AddressRegistry) -> DecodedEvent:
    topic_count = len(log.topics)
    if topic_count not in (3, 4):
        raise _Malformed(f"Transfer with {topic_count} topics")

    from_addr = _topic_address(log.topics[1])
    to_addr = _topic_address(log.topics[2])
    entry = registry.lookup(contract)
    symbol = entry.symbol if entry else None

    # ERC721: tokenId is the third indexed argument, nothing in data
    if topic_count == 4:
        return TokenTransfer(
            token_address=contract,
            from_address=from_addr,
            to_address=to_addr,
            raw_amount=1,
            decimals=0,
            normalized_amount=Decimal(1),
            standard="erc721",
            token_id=_topic_uint(log.topics[3]),
            symbol=symbol,
        )

    amount = _data_uint(log.data)
    decimals = entry.decimals if entry and entry.decimals is not None else DEFAULT_DECIMALS
    return TokenTransfer(
        token_address=contract,
        from_address=from_addr,
        to_address=to_addr,
        raw_amount=amount,
        decimals=decimals,
        normalized_amount=scale_amount(amount, decimals),
        symbol=symbol,
    )


def _decode_v2_mint(log: RawLog, contract: str, registry: AddressRegistry) -> DecodedEvent:
    _require_topics(log, 2, "Mint")
    amount0, amount1 = _data_words(log.data, 2)
    return LiquidityEvent(
        pool_address=contract,
        action="add",
        provider=_topic_address(log.topics[1]),
        amount0=amount0,
        amount1=amount1,
        pool_version="v2",
    )


def _decode_v2_burn(log: RawLog, contract: str, registry: AddressRegistry) -> DecodedEvent:
    _require_topics(log, 3, "Burn")
    amount0, amount1 = _data_words(log.data, 2)
    return LiquidityEvent(
        pool_address=contract,
        action="remove",
        provider=_topic_address(log.topics[2]),
        amount0=amount0,
        amount1=amount1,
        pool_version="v2",
    )


def _decode_v3_mint(log: RawLog, contract: str, registry: AddressRegistry) -> DecodedEvent:
    _require_topics(log, 4, "Mint")
    # data: sender, liquidity, amount0, amount1
    _, _, amount0, amount1 = _data_words(log.data, 4)
    return LiquidityEvent(
        pool_address=contract,
        action="add",
        provider=_topic_address(log.topics[1]),
        amount0=amount0,
        amount1=amount1,
        pool_version="v3",
    )


def _decode_v3_burn(log: RawLog, contract: str, registry: AddressRegistry) -> DecodedEvent:
    _require_topics(log, 4, "Burn")
    # data: liquidity, amount0, amount1
    _, amount0, amount1 = _data_words(log.data, 3)
    return LiquidityEvent(
        pool_address=contract,
        action="remove",
        provider=_topic_address(log.topics[1]),
        amount0=amount0,
        amount1=amount1,
        pool_version="v3",
    )


def _yield_decoder(action: str, event: str) -> Callable[..., DecodedEvent]:
    def decode(log: RawLog, contract: str, registry: AddressRegistry) -> DecodedEvent:
        _require_topics(log, 2, event)
        (amount,) = _data_words(log.data, 1)
        return YieldEvent(
            contract_address=contract,
            action=action,
            account=_topic_address(log.topics[1]),
            raw_amount=amount,
        )

    return decode


_DECODERS: dict[str, Callable[[RawLog, str, AddressRegistry], DecodedEvent]] = {
    sig.TRANSFER: _decode_transfer,
    sig.V2_MINT: _decode_v2_mint,
    sig.V2_BURN: _decode_v2_burn,
    sig.V3_MINT: _decode_v3_mint,
    sig.V3_BURN: _decode_v3_burn,
    sig.STAKED: _yield_decoder("stake", "Staked"),
    sig.WITHDRAWN: _yield_decoder("unstake", "Withdrawn"),
    sig.REWARD_PAID: _yield_decoder("claim", "RewardPaid"),
}


def decode_log(log: RawLog, registry: AddressRegistry | None = None) -> DecodedEvent:
    if registry is None:
        registry = load_registry()

    raw_address = log.address
    if not log.topics:
        return Unrecognized(log_address=raw_address, reason="no topics")

    word = _parse_word(log.topics[0])
    if word is None:
        return Unrecognized(
            log_address=raw_address,
            signature=log.topics[0],
            reason="malformed event signature",
        )
    signature = "0x" + word

    address_hex = _strip_hex(raw_address)
    if address_hex is None or len(address_hex) != _ADDRESS_CHARS:
        return Unrecognized(
            log_address=raw_address,
            signature=signature,
            event_name=sig.EVENT_NAMES.get(signature),
            reason="malformed log address",
        )
    contract = "0x" + address_hex

    decoder = _DECODERS.get(signature)
    if decoder is None:
        return Unrecognized(
            log_address=contract,
            signature=signature,
            event_name=sig.EVENT_NAMES.get(signature),
            reason="signature not decoded",
        )

    try:
        return decoder(log, contract, registry)
    except _Malformed as exc:
        logger.debug("Degrading log from %s to Unrecognized: %s", contract, exc)
        return Unrecognized(
            log_address=contract,
            signature=signature,
            event_name=sig.EVENT_NAMES.get(signature),
            reason=str(exc),
        )


def decode_logs(logs: Iterable[RawLog], registry: AddressRegistry | None = None) -> list[DecodedEvent]:
    """Decode every log in order; the result has exactly one entry per log."""
    if registry is None:
        registry = load_registry()
    return [decode_log(log, registry) for log in logs]
