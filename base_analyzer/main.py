import logging
from typing import Optional, get_args

from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from base_analyzer.analysis.network import EXPLORER_KINDS, collect_block_metrics, explorer_url, network_status
from base_analyzer.analysis.report import analyze_transaction, batch_analyze
from base_analyzer.classifiers import classify_logs
from base_analyzer.config import settings
from base_analyzer.errors import (
    InvalidArgumentError,
    NotFoundError,
    RpcError,
    RpcTimeoutError,
    TransactionPending,
)
from base_analyzer.metrics import analyze_rarity, compute_gas_metrics, impermanent_loss
from base_analyzer.metrics.optimizer import analyze_gas_usage
from base_analyzer.models.analysis import BatchItem, TransactionAnalysis
from base_analyzer.models.log import RawLog
from base_analyzer.models.network import BlockMetrics, NetworkStatus
from base_analyzer.models.nft import RarityReport, TokenTrait
from base_analyzer.registry.address_registry import AddressCategory, load_registry
from base_analyzer.validation.input import validate_address, validate_tx_hash, validate_tx_hashes

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger("base_analyzer.main")

app = FastAPI(title="Base Transaction Analyzer", version="0.1.0")


@app.middleware("http")
async def log_requests(request: Request, call_next):
    body_bytes = await request.body()
    body_text = body_bytes.decode("utf-8", errors="replace")[:2000]
    logger.info(
        "INCOMING REQUEST: %s %s | body=%s",
        request.method,
        request.url.path,
        body_text or "(empty)",
    )
    response = await call_next(request)
    logger.info(
        "RESPONSE: %s %s -> %s",
        request.method,
        request.url.path,
        response.status_code,
    )
    return response


# --- Error mapping ---


@app.exception_handler(TransactionPending)
async def pending_handler(request: Request, exc: TransactionPending):
    return JSONResponse(
        content={"status": "pending", "detail": "Transaction pending confirmation. Try again shortly."},
        status_code=202,
    )


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    return JSONResponse(content={"detail": str(exc)}, status_code=404)


@app.exception_handler(RpcTimeoutError)
async def rpc_timeout_handler(request: Request, exc: RpcTimeoutError):
    logger.warning("RPC timeout on %s: %s", request.url.path, exc)
    return JSONResponse(content={"detail": "Upstream RPC timed out"}, status_code=504)


@app.exception_handler(RpcError)
async def rpc_error_handler(request: Request, exc: RpcError):
    logger.error("RPC error on %s: %s (code=%s)", request.url.path, exc, exc.code)
    return JSONResponse(content={"detail": f"Upstream RPC error: {exc}"}, status_code=502)


@app.exception_handler(InvalidArgumentError)
async def invalid_argument_handler(request: Request, exc: InvalidArgumentError):
    return JSONResponse(content={"detail": str(exc)}, status_code=400)


# --- Request bodies ---


class BatchRequest(BaseModel):
    tx_hashes: list[str]


class ClassifyRequest(BaseModel):
    from_address: str
    to_address: Optional[str] = None
    value: int = Field(default=0, ge=0)
    logs: list[RawLog] = []


class GasRequest(BaseModel):
    gas_used: int = Field(ge=0)
    gas_price: int = Field(ge=0)
    gas_limit: Optional[int] = Field(default=None, ge=0)
    transfer_count: int = Field(default=0, ge=0)


class RarityRequest(BaseModel):
    attributes: list[TokenTrait]
    collection_traits: dict[str, dict[str, int]]


# --- Routes ---


@app.get("/v1/analyze/{tx_hash}", response_model=TransactionAnalysis)
async def analyze(tx_hash: str):
    tx_hash = validate_tx_hash(tx_hash)
    logger.info("ANALYZE %s", tx_hash[:12])
    return await analyze_transaction(tx_hash)


@app.post("/v1/analyze/batch", response_model=list[BatchItem])
async def analyze_batch(body: BatchRequest):
    tx_hashes = validate_tx_hashes(body.tx_hashes, settings.batch_size)
    logger.info("BATCH of %d hashes", len(tx_hashes))
    return await batch_analyze(tx_hashes)


@app.post("/v1/classify")
async def classify(body: ClassifyRequest):
    from_address = validate_address(body.from_address, "from_address")
    to_address = validate_address(body.to_address, "to_address") if body.to_address else None

    events, result = classify_logs(from_address, to_address, body.value, body.logs)
    return {
        "classification": result.model_dump(mode="json"),
        "events": [e.model_dump(mode="json") for e in events],
    }


@app.post("/v1/gas")
async def gas(body: GasRequest):
    metrics = compute_gas_metrics(body.gas_used, body.gas_price, body.gas_limit)
    report = analyze_gas_usage(body.gas_used, body.gas_price, body.gas_limit, body.transfer_count)
    return {
        "metrics": metrics.model_dump(mode="json"),
        "optimization": report.model_dump(mode="json"),
    }


@app.get("/v1/impermanent-loss")
async def impermanent_loss_route(
    entry_price: float = Query(...),
    current_price: float = Query(...),
):
    loss = impermanent_loss(entry_price, current_price)
    return {
        "entry_price": entry_price,
        "current_price": current_price,
        "impermanent_loss_percentage": loss,
    }


@app.get("/v1/registry/{category}")
async def registry_entries(category: str):
    category = category.strip().lower()
    if category not in get_args(AddressCategory):
        raise HTTPException(
            status_code=400,
            detail=f"Unknown category '{category}'. Expected one of: {', '.join(get_args(AddressCategory))}",
        )
    entries = load_registry().entries_by_category(category)
    return {
        "category": category,
        "entries": [e.model_dump(exclude_none=True) for e in entries],
    }


@app.get("/v1/network/status", response_model=NetworkStatus)
async def status():
    return await network_status()


@app.get("/v1/blocks/{block_number}/metrics", response_model=BlockMetrics)
async def block_metrics(block_number: int):
    if block_number < 0:
        raise HTTPException(status_code=400, detail="block_number must not be negative")
    logger.info("BLOCK METRICS %s", block_number)
    return await collect_block_metrics(block_number)


@app.post("/v1/nft/rarity", response_model=RarityReport)
async def nft_rarity(body: RarityRequest):
    return analyze_rarity(body.attributes, body.collection_traits)


@app.get("/v1/explorer/{kind}/{value}")
async def explorer_link(kind: str, value: str):
    if kind not in EXPLORER_KINDS:
        raise HTTPException(
            status_code=400,
            detail=f"Unknown link kind '{kind}'. Expected one of: {', '.join(EXPLORER_KINDS)}",
        )
    value = validate_tx_hash(value) if kind == "tx" else validate_address(value)
    return {"kind": kind, "value": value, "url": explorer_url(value, kind)}
