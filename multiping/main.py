from fastapi import FastAPI

from .api import health, munin, ping

app = FastAPI(title="multiping")

app.include_router(health.router, prefix="/health", tags=["health"])
app.include_router(munin.router, prefix="/munin", tags=["munin"])
app.include_router(ping.router, prefix="/ping", tags=["ping"])
