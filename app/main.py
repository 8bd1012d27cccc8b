import logging
import os
import time
from pathlib import Path

# 在导入 config 前加载项目根目录 .env，与脚本使用同一套环境变量
_root = Path(__file__).resolve().parent.parent
_env = _root / ".env"
if _env.is_file():
    with open(_env, "r", encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if line and "=" in line and not line.startswith("#"):
                k, _, v = line.partition("=")
                k, v = k.strip(), v.strip()
                if k and os.environ.get(k) is None:
                    os.environ[k] = v

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from app.api.router import api_router
from app.core.config import Settings, settings
from app.core.errors import HashingError, StorageUnavailableError
from app.core.tokens import TokenService
from app.services.confirmation_store import InMemoryPendingStore

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")
logger = logging.getLogger(__name__)


class RequestLogMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        elapsed = (time.perf_counter() - start) * 1000
        addr = request.client.host if request.client else "-"
        logger.info(f'{addr} - "{request.method} {request.url.path}" {response.status_code} ({elapsed:.0f}ms)')
        return response


async def _hashing_error_handler(request: Request, exc: HashingError):
    logger.error(f"hashing failure on {request.url.path}: {exc!r}")
    return JSONResponse(status_code=500, content={"detail": "服务器内部错误"})


async def _storage_error_handler(request: Request, exc: StorageUnavailableError):
    logger.error(f"storage unavailable on {request.url.path}: {exc!r}")
    return JSONResponse(status_code=503, content={"detail": "服务暂时不可用，请稍后重试"})


def create_app(app_settings: Settings | None = None) -> FastAPI:
    """未配置 JWT_SECRET 时这里直接抛 MissingSecretError，进程起不来。"""
    app_settings = app_settings or settings
    token_service = TokenService(app_settings.jwt_secret, app_settings.jwt_algorithm)

    app = FastAPI(title="Cards Backend")
    app.state.token_service = token_service
    app.state.pending_store = InMemoryPendingStore()
    app.add_middleware(RequestLogMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(HashingError, _hashing_error_handler)
    app.add_exception_handler(StorageUnavailableError, _storage_error_handler)
    app.include_router(api_router, prefix=app_settings.api_prefix)
    return app


app = create_app()
