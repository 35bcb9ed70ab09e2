import logging
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from netbill.core.config import settings
from netbill.core.errors import RecordNotFound, RemoteUnavailable
from netbill.core.middleware import RequestLogMiddleware
from netbill.db.session import get_db
from netbill.api import health, packages, customers, bills, payments, users, dashboard

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title=settings.PROJECT_NAME)
app.add_middleware(RequestLogMiddleware)

# Include routers
app.include_router(health.router)
for module in (packages, customers, bills, payments, users, dashboard):
    app.include_router(module.router, prefix=settings.API_V1_STR)

@app.exception_handler(RecordNotFound)
async def record_not_found_handler(request: Request, exc: RecordNotFound):
    return JSONResponse(status_code=404, content={"detail": str(exc)})

@app.exception_handler(RemoteUnavailable)
async def remote_unavailable_handler(request: Request, exc: RemoteUnavailable):
    # already logged by the store; callers only learn that storage is down
    return JSONResponse(status_code=503, content={"detail": "Service unavailable"})

@app.on_event("startup")
async def startup_event():
    if settings.SHEETS_BOOTSTRAP_HEADERS:
        created = await get_db().initialize()
        if created:
            logger.info(f"Wrote headers for: {', '.join(created)}")

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
