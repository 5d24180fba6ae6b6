import logging

from fastapi import FastAPI

from hook_bridge.config import get_settings
from dotenv import load_dotenv

load_dotenv()

# 日志级别由 LOG_LEVEL 控制（默认 INFO）；触发 API 请求/响应、webhook 转换失败都会打到这里
logging.basicConfig(
    level=get_settings().LOG_LEVEL.upper(),
    format="%(asctime)s %(name)s %(levelname)s %(message)s",
)

from hook_bridge.api.routes import hook_router, router as api_router


def create_app() -> FastAPI:
    """
    创建 FastAPI 应用，并挂载路由与全局依赖。
    """
    app = FastAPI(
        title="Hook Bridge",
        version="0.1.0",
    )

    # 预加载配置，启动时如果 .env 有问题可以尽早暴露
    get_settings()

    app.include_router(api_router, prefix="/api")
    # webhook 入口不加前缀：/h/{service_id}/{app_slug}/{api_token}
    app.include_router(hook_router)

    @app.get("/health", summary="健康检查")
    async def health_check():
        return {"status": "ok"}

    return app


app = create_app()
