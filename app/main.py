import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, HTTPException, Query

from app.config import get_settings
from app.engine import AnalysisOptions, analyze_sales_data
from app.errors import ConfigurationError, MissingReferenceError, ValidationError
from app.models import RankedSellerReport, SalesDataset
from app.store import store
from app.strategies import calculate_bonus_by_profit, calculate_simple_revenue

settings = get_settings()

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.SEED_ON_STARTUP:
        from scripts.seed_data import seed
        seed(store)
        logger.info("Seeded store with %d sellers, %d purchase records",
                    len(store.sellers), len(store.purchase_records))
    yield


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Per-seller revenue, profit, bonus and top products",
    lifespan=lifespan,
)


def _run_report(dataset, limit: Optional[int] = None):
    options = AnalysisOptions(
        calculate_revenue=calculate_simple_revenue,
        calculate_bonus=calculate_bonus_by_profit,
        top_products_limit=limit,
    )
    try:
        return analyze_sales_data(dataset, options)
    except (ValidationError, MissingReferenceError) as exc:
        raise HTTPException(422, str(exc))
    except ConfigurationError as exc:
        logger.exception("Report configuration failed")
        raise HTTPException(500, str(exc))


# ── Catalog ──────────────────────────────────────────────────────────────────

@app.get("/api/v1/sellers", summary="List all sellers")
def list_sellers():
    return {"sellers": [s.model_dump() for s in store.list_sellers()]}


@app.get("/api/v1/sellers/{seller_id}", summary="Get seller details")
def get_seller(seller_id: str):
    seller = store.get_seller(seller_id)
    if not seller:
        raise HTTPException(404, f"Seller '{seller_id}' not found")
    return seller.model_dump()


@app.get("/api/v1/products", summary="List all products")
def list_products():
    return {"products": [p.model_dump() for p in store.list_products()]}


# ── Reports ──────────────────────────────────────────────────────────────────

@app.get("/api/v1/reports/sellers", summary="Rank stored sellers by profit")
def get_seller_report(
    limit: Optional[int] = Query(default=None, ge=1, description="Top products per seller"),
):
    reports = _run_report(store.dataset(), limit)
    return {"sellers": [r.model_dump() for r in reports]}


@app.get("/api/v1/reports/sellers/{seller_id}", summary="Report row for one seller")
def get_seller_report_row(seller_id: str):
    if store.get_seller(seller_id) is None:
        raise HTTPException(404, f"Seller '{seller_id}' not found")
    reports = _run_report(store.dataset())
    for rank, report in enumerate(reports):
        if report.seller_id == seller_id:
            return RankedSellerReport(
                **report.model_dump(), rank=rank, total_sellers=len(reports)
            ).model_dump()
    raise HTTPException(404, f"Seller '{seller_id}' not found")


@app.post("/api/v1/reports/sellers", summary="Rank sellers of a posted dataset")
def post_seller_report(
    dataset: SalesDataset,
    limit: Optional[int] = Query(default=None, ge=1, description="Top products per seller"),
):
    reports = _run_report(dataset, limit)
    return {"sellers": [r.model_dump() for r in reports]}


# ── Admin ─────────────────────────────────────────────────────────────────────

@app.post("/api/v1/admin/seed", summary="Re-seed test data")
def reseed():
    from scripts.seed_data import seed
    store.clear()
    seed(store)
    return {
        "status": "seeded",
        "sellers": len(store.sellers),
        "products": len(store.products),
        "purchase_records": len(store.purchase_records),
    }
