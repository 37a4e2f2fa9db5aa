from typing import Iterable

from base_analyzer.classifiers.evm_classifier import classify
from base_analyzer.decoding import decode_logs
from base_analyzer.models.classification import ClassificationResult, TransactionContext
from base_analyzer.models.event import DecodedEvent
from base_analyzer.models.log import RawLog
from base_analyzer.registry.address_registry import AddressRegistry, load_registry


def classify_transaction(
    ctx: TransactionContext, registry: AddressRegistry | None = None
) -> ClassificationResult:
    return classify(ctx, registry)


def classify_logs(
    from_address: str,
    to_address: str | None,
    value: int,
    logs: Iterable[RawLog],
    registry: AddressRegistry | None = None,
) -> tuple[list[DecodedEvent], ClassificationResult]:
    """Decode ``logs`` and classify the transaction in one call.

    Returns every decoded event (Unrecognized included, in log order) along
    with the classification.
    """
    if registry is None:
        registry = load_registry()
    events = decode_logs(logs, registry)
    ctx = TransactionContext.from_decoded(from_address, to_address, value, events)
    return events, classify(ctx, registry)
