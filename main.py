# main.py
import logging
import uvicorn
from fastapi import Depends, FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from openinv.core.config import settings
from openinv.deps import get_storage
from openinv.routers import auth, inventory, reports, sales
from openinv.storage import KeyValueStorage, StorageWriteError

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("openinv")

app = FastAPI(title="OpenInv Inventory API")

app.include_router(auth.router)
app.include_router(inventory.router)
app.include_router(sales.router)
app.include_router(reports.router)

@app.exception_handler(StorageWriteError)
async def storage_write_failed(request: Request, exc: StorageWriteError):
    logger.error("Write failed on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=503, content={"detail": "Storage unavailable, change not saved"})

@app.exception_handler(RequestValidationError)
async def validation_failed(request: Request, exc: RequestValidationError):
    # rejected inputs can be inf/nan, which JSONResponse cannot render
    errors = [{k: v for k, v in err.items() if k not in ("input", "ctx")} for err in exc.errors()]
    return JSONResponse(status_code=422, content={"detail": jsonable_encoder(errors)})

@app.get("/ping")
async def ping_storage(kv: KeyValueStorage = Depends(get_storage)):
    return {"storage_ok": await kv.ping()}

if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
