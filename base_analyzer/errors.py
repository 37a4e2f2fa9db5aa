"""
Error taxonomy for the analyzer.

Fetch failures surface as typed exceptions; malformed chain data never does
(the decoder degrades it to ``Unrecognized`` instead).
"""


class AnalyzerError(Exception):
    """Base class for every error raised by base_analyzer."""


class NotFoundError(AnalyzerError):
    pass


class TransactionNotFound(NotFoundError):
    def __init__(self, tx_hash: str):
        super().__init__(f"Transaction {tx_hash} not found")
        self.tx_hash = tx_hash


class TransactionPending(TransactionNotFound):
    """The transaction is known to the node but has no receipt yet."""

    def __init__(self, tx_hash: str):
        AnalyzerError.__init__(self, f"Transaction {tx_hash} is pending confirmation")
        self.tx_hash = tx_hash


class BlockNotFound(NotFoundError):
    def __init__(self, block_number: int):
        super().__init__(f"Block {block_number} not found")
        self.block_number = block_number


class RpcError(AnalyzerError):
    def __init__(self, message: str, code: int | None = None):
        super().__init__(message)
        self.code = code


class RpcTimeoutError(RpcError):
    pass


class InvalidArgumentError(AnalyzerError, ValueError):
    pass
