"""Dashboard landing page."""

import asyncio

from fastapi import APIRouter

from sawa_admin.dependencies import Context
from sawa_admin.schemas.result import Ok
from sawa_admin.schemas.views import HomeView

router = APIRouter(tags=["dashboard"])

# Gateways attributes whose totals the landing page shows
HOME_TOTALS = ("users", "listings", "bookings", "reviews", "transactions")


@router.get("/dashboard", response_model=HomeView)
async def home(ctx: Context) -> HomeView:
    # A one-item page is enough, only meta.total is read
    results = await asyncio.gather(
        *(getattr(ctx.gateways, name).list(1, 1) for name in HOME_TOTALS)
    )
    ctx.ensure_session()
    totals = {
        name: result.meta.total if isinstance(result, Ok) and result.meta else 0
        for name, result in zip(HOME_TOTALS, results, strict=True)
    }
    return HomeView(totals=totals, toasts=ctx.toasts())
