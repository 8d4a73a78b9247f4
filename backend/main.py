"""
AI NFT Generator - FastAPI主应用
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ainft.core.config import settings, validate_required_settings
from ainft.api.router import api_router
from ainft.core.log_utils import setup_logging, get_logger
from ainft.core.mlflow_tracker import ensure_mlflow_initialized
from ainft.db.database import close_db, init_db

# 初始化日志系统
setup_logging()

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI):
    """应用生命周期管理"""
    logger.info("应用启动中...")

    problems = validate_required_settings(settings)
    for problem in problems:
        logger.warning("配置检查未通过: {problem}", problem=problem)
    if problems and settings.app_env == "production":
        raise RuntimeError(f"Missing or invalid configuration: {', '.join(problems)}")

    await init_db()

    mlflow_enabled = ensure_mlflow_initialized()
    if mlflow_enabled:
        logger.info("MLflow追踪已启用")
    else:
        logger.info("MLflow追踪未启用")

    logger.info("应用启动完成")

    yield

    await close_db()
    logger.info("应用关闭")


# 创建FastAPI应用实例
app = FastAPI(
    title=settings.project_name,
    version=settings.app_version,
    description="AI图片生成并铸造为NFT",
    openapi_url=f"{settings.api_prefix}/openapi.json",
    docs_url=f"{settings.api_prefix}/docs",
    redoc_url=f"{settings.api_prefix}/redoc",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"]
)


@app.exception_handler(StarletteHTTPException)
async def flat_http_exception_handler(request: Request, exc: StarletteHTTPException):
    """字典形式的detail直接作为响应体"""
    if isinstance(exc.detail, dict):
        content = {key: value for key, value in exc.detail.items() if value is not None}
        return JSONResponse(status_code=exc.status_code, content=content, headers=exc.headers)
    return await http_exception_handler(request, exc)


# 注册API路由
app.include_router(api_router, prefix=settings.api_prefix)


@app.get("/")
def read_root():
    """根路径"""
    return {
        "message": "API is running...",
        "version": settings.app_version,
        "docs": f"{settings.api_prefix}/docs"
    }


@app.get("/health")
def health_check():
    """健康检查"""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=settings.app_debug,
        log_level=settings.log_level.lower()
    )
