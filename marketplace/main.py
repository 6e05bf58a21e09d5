import logging
import threading
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import Depends, FastAPI, Header, HTTPException, Request
from fastapi.responses import JSONResponse

from marketplace.config import (
    APP_NAME,
    APP_VERSION,
    LOG_LEVEL,
    SEED_ON_STARTUP,
    validate_config,
)
from marketplace.engine import list_for_sale, purchase
from marketplace.errors import DispatchError
from marketplace.models import AccountSummary, ListRequest, PurchaseRequest
from marketplace.seed import seed
from marketplace.store import market

logging.basicConfig(
    level=getattr(logging, LOG_LEVEL, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# sale operations run strictly one at a time, and reads never see one half-applied
_dispatch_lock = threading.Lock()


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Starting {APP_NAME} v{APP_VERSION}")
    for error in validate_config():
        logger.error(f"Configuration error: {error}")
    if SEED_ON_STARTUP:
        # Auto-seed on startup so the service is immediately usable.
        # No request is served before this returns, so no lock is needed.
        seed(market)
    yield


app = FastAPI(
    title=APP_NAME,
    version=APP_VERSION,
    description="Listing and purchase of quantity-bearing assets",
    lifespan=lifespan,
)


@app.exception_handler(DispatchError)
async def dispatch_error_handler(request: Request, exc: DispatchError):
    logger.info(f"Rejected {request.method} {request.url.path}: {exc.module}.{exc.kind}")
    return JSONResponse(
        status_code=400,
        content={"error": {"module": exc.module, "kind": exc.kind, "message": exc.message}},
    )


def require_caller(x_account_id: Optional[str] = Header(default=None)) -> str:
    # the identity is verified upstream; this layer only needs it to be present
    if not x_account_id:
        raise HTTPException(401, "X-Account-Id header is required")
    return x_account_id


# ── Listings ─────────────────────────────────────────────────────────────────

@app.get("/api/v1/listings", summary="List active listings")
def get_listings(asset_id: Optional[str] = None):
    with _dispatch_lock:
        listings = market.listings.list_listings(asset_id)
    return {"listings": [listing.model_dump() for listing in listings]}


@app.get("/api/v1/listings/{asset_id}/{seller_id}", summary="Get a seller's listing of an asset")
def get_listing(asset_id: str, seller_id: str):
    with _dispatch_lock:
        record = market.listings.get(asset_id, seller_id)
    return {"asset_id": asset_id, "seller": seller_id, **record.model_dump()}


@app.post("/api/v1/listings", summary="List an asset for sale")
def create_listing(body: ListRequest, caller: str = Depends(require_caller)):
    with _dispatch_lock:
        record = list_for_sale(caller, body.asset_id, body.price, body.quantity, market)
    return {"asset_id": body.asset_id, "seller": caller, **record.model_dump()}


@app.post(
    "/api/v1/listings/{asset_id}/{seller_id}/purchase",
    summary="Buy some or all of a listing",
)
def buy(asset_id: str, seller_id: str, body: PurchaseRequest, caller: str = Depends(require_caller)):
    with _dispatch_lock:
        receipt = purchase(caller, asset_id, seller_id, body.quantity, market)
    return receipt.model_dump()


# ── Accounts ─────────────────────────────────────────────────────────────────

@app.get("/api/v1/accounts/{account_id}", summary="Balance and holdings of an account")
def get_account(account_id: str):
    with _dispatch_lock:
        summary = AccountSummary(
            account_id=account_id,
            free_balance=market.balances.free_balance(account_id),
            holdings=market.nfts.holdings_of(account_id),
        )
    return summary.model_dump()


# ── Events ───────────────────────────────────────────────────────────────────

@app.get("/api/v1/events", summary="Emitted notifications, oldest first")
def get_events():
    with _dispatch_lock:
        events = list(market.events.events)
    return {"events": [e.model_dump() for e in events]}


# ── Admin ─────────────────────────────────────────────────────────────────────

@app.post("/api/v1/admin/seed", summary="Re-seed demo data")
def reseed():
    with _dispatch_lock:
        seed(market)
        listings, accounts = len(market.listings.sales), len(market.balances.accounts)
    return {"status": "seeded", "listings": listings, "accounts": accounts}
