"""Quote endpoints: calculation, field sync, and saved quotes"""
import json
import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, Header, HTTPException, Response

from autoquote.schemas.quote import QuoteCreate, QuoteInput, QuoteResult, SavedQuote, SyncRequest
from autoquote.services.calculator import calculate
from autoquote.services.quote_store import JsonQuoteStore, get_quote_store
from autoquote.services.synchronizer import synchronize
from autoquote.core.redis import get_redis
from autoquote.core.config import settings
from autoquote.core.metrics import cache_hits, cache_misses
from autoquote.utils.hashing import cache_key
from autoquote.utils.idempotency import get_idempotent, set_idempotent

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/quotes", tags=["quotes"])


@router.get("", response_model=List[SavedQuote])
async def list_quotes(store: JsonQuoteStore = Depends(get_quote_store)):
    return await store.list()


@router.post("", response_model=SavedQuote, status_code=201)
async def create_quote(
    payload: QuoteCreate,
    idempotency_key: Optional[str] = Header(None),
    store: JsonQuoteStore = Depends(get_quote_store),
):
    if idempotency_key:
        prev = await get_idempotent(idempotency_key)
        if prev:
            return prev

    quote = await store.create(payload)

    if idempotency_key:
        await set_idempotent(idempotency_key, quote.model_dump(by_alias=True))
    return quote


@router.delete("/{quote_id}", status_code=204)
async def delete_quote(quote_id: str, store: JsonQuoteStore = Depends(get_quote_store)):
    if not await store.delete(quote_id):
        raise HTTPException(status_code=404, detail="Not found")
    return Response(status_code=204)


@router.get("/defaults", response_model=QuoteInput)
async def default_quote():
    return QuoteInput(
        cost=settings.DEFAULT_COST,
        profit=settings.DEFAULT_PROFIT,
        selling_price=settings.DEFAULT_SELLING_PRICE,
        term=settings.DEFAULT_TERM,
        rate=settings.DEFAULT_RATE,
        out_of_pocket=settings.DEFAULT_OUT_OF_POCKET,
        tax_rate=settings.DEFAULT_TAX_RATE,
    )


@router.post("/sync", response_model=QuoteInput)
async def sync_fields(req: SyncRequest):
    return synchronize(req.input, req.edited)


@router.post("/calc", response_model=QuoteResult)
async def calc_quote(req: QuoteInput):

    key = cache_key("calc", req.model_dump(exclude={"quote_name"}))
    redis = get_redis()

    if redis is not None:
        try:
            cached = await redis.get(key)
            if cached:
                cache_hits.labels(cache="calc").inc()
                return QuoteResult.model_validate(json.loads(cached))
            cache_misses.labels(cache="calc").inc()
        except Exception as e:
            logger.warning(f"Cache retrieval failed: {e}")

    result = calculate(req)

    if redis is not None:
        try:
            await redis.set(
                key,
                json.dumps(result.model_dump(by_alias=True)),
                ex=settings.PRICE_CACHE_TTL
            )
        except Exception as e:
            logger.warning(f"Cache write failed: {e}")

    return result
