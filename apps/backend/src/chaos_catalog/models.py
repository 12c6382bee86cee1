"""API models for the chaos catalog service."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .catalog.schema import Product


class ApiModel(BaseModel):
    """Base for wire models: snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SearchResponse(ApiModel):
    """Result of a catalog search."""

    query: str
    count: int
    items: list[Product]
    timestamp: int = Field(..., description="Epoch milliseconds")


class CheckoutRequest(ApiModel):
    """Products to check out. Order matters: it feeds the order id."""

    product_ids: list[str] = Field(
        default_factory=list, description="Product ids in cart order"
    )


class CheckoutResponse(ApiModel):
    """Outcome of a stateless checkout."""

    order_id: str = Field(..., description="16 hex characters, deterministic per cart")
    total: int
    timestamp: int = Field(..., description="Epoch milliseconds")


class ChaosPolicyView(ApiModel):
    """Currently active fault injection policy."""

    latency_ms: int
    jitter_ms: int
    error_rate: float
    active: bool


class ChaosPolicyUpdate(ApiModel):
    """Partial update of the fault injection policy; omitted knobs are kept."""

    latency_ms: int | None = Field(None, ge=0)
    jitter_ms: int | None = Field(None, ge=0)
    error_rate: float | None = Field(None, ge=0.0, le=1.0)


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    service: str = "Chaos Catalog"
