"""FastAPI 应用入口"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from catalog_engine import __version__
from catalog_engine.core.config import Settings, settings as default_settings
from catalog_engine.core.dependencies import CatalogContainer, create_keygen
from catalog_engine.core.errors import AppError, CatalogError, create_error_response
from catalog_engine.core.logging import logger
from catalog_engine.routers import audit, items, store
from catalog_engine.schemas.store import StoreInitArg
from catalog_engine.storage import create_storage


def create_app(settings: Settings | None = None) -> FastAPI:
    """创建应用实例"""
    settings = settings or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """应用生命周期管理"""
        # 启动时配置日志（确保最先执行）
        logger.configure(mode=settings.LOG_MODE, level=settings.LOG_LEVEL, log_file=settings.LOG_FILE)
        logger.info("启动应用...", module="app", storage=settings.STORAGE_BACKEND)

        storage = create_storage(settings)
        await storage.init()

        container = CatalogContainer(
            settings=settings,
            storage=storage,
            keygen=create_keygen(settings, storage),
        )
        app.state.container = container

        init_arg = settings.store_init_arg
        await container.store.init_store(
            StoreInitArg(id=init_arg[0], name=init_arg[1]) if init_arg else None
        )

        logger.info(
            "应用启动完成",
            module="app",
            host=settings.API_HOST,
            port=settings.API_PORT,
            keygen=type(container.keygen).__name__,
        )

        yield

        logger.info("正在关闭应用...", module="app")
        await storage.close()
        logger.info("应用已关闭", module="app")

    app = FastAPI(
        title="商品目录引擎",
        description="单店铺商品目录：属性组合解析、回退与批量写入",
        version=__version__,
        lifespan=lifespan,
    )

    # CORS 配置
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=create_error_response(exc.code, exc.error_message, exc.data),
        )

    @app.exception_handler(CatalogError)
    async def catalog_error_handler(request: Request, exc: CatalogError) -> JSONResponse:
        logger.error(
            "目录引擎内部错误",
            module="app",
            path=request.url.path,
            error_type=type(exc).__name__,
            error=str(exc),
        )
        return JSONResponse(
            status_code=500,
            content=create_error_response("catalog_error", str(exc), {"type": type(exc).__name__}),
        )

    # 注册路由
    app.include_router(store.router)
    app.include_router(items.router)
    app.include_router(audit.router)

    @app.get("/health")
    async def health_check(request: Request):
        """健康检查"""
        container: CatalogContainer = request.app.state.container
        return {
            "status": "ok",
            "version": __version__,
            "storage": container.storage.backend_name,
            "items": await container.catalog.count(),
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "catalog_engine.main:app",
        host=default_settings.API_HOST,
        port=default_settings.API_PORT,
        reload=True,
    )
