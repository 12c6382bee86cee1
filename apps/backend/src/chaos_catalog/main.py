import time

from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException

from .catalog import OrderIdDeriver, Product, ProductCatalog, ProductNotFound
from .chaos import FaultInjectionMiddleware, FaultInjector, FaultPolicy, FaultPolicyStore
from .config import get_settings
from .models import (
    ChaosPolicyUpdate,
    ChaosPolicyView,
    CheckoutRequest,
    CheckoutResponse,
    HealthResponse,
    SearchResponse,
)

load_dotenv()

app = FastAPI(
    title="Chaos Catalog API",
    description="Product catalog fronted by configurable latency and error injection",
    version="0.1.0",
)

HEALTH_PATH = "/api/health"
CHAOS_PATH = "/api/chaos"

catalog = ProductCatalog()
order_ids = OrderIdDeriver()
policy_store = FaultPolicyStore(get_settings().fault_policy())

# Health and policy control are never fault injected.
app.add_middleware(
    FaultInjectionMiddleware,
    policy_store=policy_store,
    injector=FaultInjector(),
    exempt_paths=(HEALTH_PATH, CHAOS_PATH),
)


def _now_ms() -> int:
    return int(time.time() * 1000)


def _policy_view(policy: FaultPolicy) -> ChaosPolicyView:
    return ChaosPolicyView(
        latency_ms=policy.base_delay_ms,
        jitter_ms=policy.jitter_ms,
        error_rate=policy.error_rate,
        active=policy.is_active,
    )


@app.get(HEALTH_PATH, response_model=HealthResponse)
def health():
    return HealthResponse(status="ok")


# --- Catalog endpoints (fault injected) ---

@app.get("/api/search", response_model=SearchResponse)
def search(q: str | None = None):
    items = catalog.search(q)
    return SearchResponse(query=q or "", count=len(items), items=items, timestamp=_now_ms())


@app.get("/api/product/{product_id}", response_model=Product)
def get_product(product_id: str):
    try:
        return catalog.get(product_id)
    except ProductNotFound:
        raise HTTPException(status_code=404, detail="no such product")


@app.post("/api/checkout", response_model=CheckoutResponse)
def checkout(request: CheckoutRequest):
    total = catalog.price_sum(request.product_ids)
    order_id = order_ids.derive(request, total)
    return CheckoutResponse(order_id=order_id, total=total, timestamp=_now_ms())


# --- Fault policy control ---

@app.get(CHAOS_PATH, response_model=ChaosPolicyView)
def get_chaos_policy():
    return _policy_view(policy_store.current())


@app.put(CHAOS_PATH, response_model=ChaosPolicyView)
def update_chaos_policy(update: ChaosPolicyUpdate):
    policy = policy_store.update(
        base_delay_ms=update.latency_ms,
        jitter_ms=update.jitter_ms,
        error_rate=update.error_rate,
    )
    return _policy_view(policy)
