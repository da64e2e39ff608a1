"""Fuel fill tracking package.

- models.py: fill, vehicle and statistics models
- services/: statistics engine, optimistic in-memory store, refresh loop
  and the fill API client
- routes/: API endpoint handlers over the app's FillSession
- serializers.py: date parsing and display formatting
"""

from fastapi import APIRouter

from fills.routes import fills, statistics, vehicles

router = APIRouter()

router.include_router(fills.router, tags=["fills"])
router.include_router(statistics.router, tags=["fill-statistics"])
router.include_router(vehicles.router, tags=["vehicles"])

__all__ = ["router"]
