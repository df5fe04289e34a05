# app/main.py
import logging
from contextlib import asynccontextmanager
from typing import Optional, Dict, Any

from fastapi import FastAPI, Body, Depends, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import config
from .core import ProductIn
from .database import CollectionRepository, JsonFileRepository
from .errors import StoreError
from .logic import (
    list_products_logic, get_product_logic, create_product_logic,
    update_product_logic, delete_product_logic,
    list_carts_logic, get_cart_logic, create_cart_logic,
    update_cart_logic, delete_cart_logic, add_product_to_cart_logic
)

config.configure_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("products collection: %s", config.PRODUCTS_FILE)
    logger.info("carts collection: %s", config.CARTS_FILE)
    yield


app = FastAPI(title="cartstore (JSON file backed)", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ---------------------------
# Repositories (one per request, nothing cached)
# ---------------------------
def get_product_repo() -> CollectionRepository:
    return JsonFileRepository(config.PRODUCTS_FILE, name="products")

def get_cart_repo() -> CollectionRepository:
    return JsonFileRepository(config.CARTS_FILE, name="carts")

# ---------------------------
# Error responses: {"error": message}
# ---------------------------
@app.exception_handler(StoreError)
async def store_error_handler(request: Request, exc: StoreError):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    problems = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        problems.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return JSONResponse(status_code=400, content={"error": "Invalid request: " + "; ".join(problems)})

@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": str(exc)})

# ---------------------------
# Product endpoints
# ---------------------------
@app.get("/api/products")
def list_products(limit: Optional[str] = None,
                        products: CollectionRepository = Depends(get_product_repo)):
    return list_products_logic(products, limit)

@app.get("/api/products/{pid}")
def get_product(pid: str, products: CollectionRepository = Depends(get_product_repo)):
    return get_product_logic(products, pid)

@app.post("/api/products", status_code=201)
def create_product(payload: Optional[ProductIn] = None,
                         products: CollectionRepository = Depends(get_product_repo)):
    return create_product_logic(products, payload or ProductIn())

@app.put("/api/products/{pid}")
def update_product(pid: str, updates: Optional[Dict[str, Any]] = Body(None),
                         products: CollectionRepository = Depends(get_product_repo)):
    return update_product_logic(products, pid, updates)

@app.delete("/api/products/{pid}")
def delete_product(pid: str, products: CollectionRepository = Depends(get_product_repo)):
    return delete_product_logic(products, pid)

# ---------------------------
# Cart endpoints
# ---------------------------
@app.get("/api/carts")
def list_carts(carts: CollectionRepository = Depends(get_cart_repo)):
    return list_carts_logic(carts)

@app.get("/api/carts/{cid}")
def get_cart(cid: str, carts: CollectionRepository = Depends(get_cart_repo)):
    return get_cart_logic(carts, cid)

@app.post("/api/carts", status_code=201)
def create_cart(carts: CollectionRepository = Depends(get_cart_repo)):
    return create_cart_logic(carts)

@app.put("/api/carts/{cid}")
def update_cart(cid: str, updates: Optional[Dict[str, Any]] = Body(None),
                      carts: CollectionRepository = Depends(get_cart_repo)):
    return update_cart_logic(carts, cid, updates)

@app.delete("/api/carts/{cid}")
def delete_cart(cid: str, carts: CollectionRepository = Depends(get_cart_repo)):
    return delete_cart_logic(carts, cid)

@app.post("/api/carts/{cid}/product/{pid}")
def add_product_to_cart(cid: str, pid: str,
                              carts: CollectionRepository = Depends(get_cart_repo),
                              products: CollectionRepository = Depends(get_product_repo)):
    return add_product_to_cart_logic(carts, products, cid, pid)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=config.HOST, port=config.PORT)
