"""Pydantic schemas for saved portfolio endpoints."""

from typing import Optional

from pydantic import BaseModel, Field


class PortfolioNameRequest(BaseModel):
    """Request schema carrying a portfolio name."""

    name: str = Field(..., min_length=1, max_length=255)


class PortfolioMetadataResponse(BaseModel):
    """Response schema for a saved portfolio listing entry."""

    model_config = {"from_attributes": True}

    id: str
    name: str
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class PortfolioListResponse(BaseModel):
    portfolios: list[PortfolioMetadataResponse]
    active_portfolio_id: Optional[str] = None
    count: int
