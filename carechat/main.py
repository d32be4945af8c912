# carechat/main.py
import logging

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.openapi.utils import get_openapi
from fastapi.responses import JSONResponse

from carechat import models  # noqa: F401 关键：确保 ORM 模型被加载
from carechat.config import LLM_API_KEY, LOG_LEVEL, PORT
from carechat.db import Base, engine
from carechat.errors import CareChatError
from carechat.routes.auth_routes import router as auth_router
from carechat.routes.chat_routes import router as chat_router

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

logger = logging.getLogger(__name__)

# =========================
# App 基本信息
# =========================
app = FastAPI(
    title="CareChat",
    version="0.1.0",
    description="Healthcare chat assistant API",
)

# =========================
# 中间件
# =========================
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =========================
# 错误统一返回 {"error": ...}
# =========================
@app.exception_handler(CareChatError)
async def carechat_error_handler(request: Request, exc: CareChatError):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    details = [
        {"field": ".".join(str(p) for p in err["loc"][1:]), "message": err["msg"]}
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid request body", "details": details},
    )


# =========================
# 启动时建表
# =========================
@app.on_event("startup")
def on_startup() -> None:
    Base.metadata.create_all(bind=engine)
    logger.info("Database: %s", engine.url.render_as_string(hide_password=True))
    logger.info("LLM API key configured: %s", "Yes" if LLM_API_KEY else "No")


# =========================
# Health Check
# =========================
@app.get("/health", tags=["default"])
def health():
    return {"status": "ok"}


# =========================
# 路由注册
# =========================
app.include_router(auth_router, prefix="/api", tags=["auth"])
app.include_router(chat_router, prefix="/api/chat", tags=["chat"])


# =========================
# Swagger Authorize（Bearer Token）
# =========================
BEARER_SCHEME = {"type": "http", "scheme": "bearer", "bearerFormat": "JWT"}


def openapi_with_bearer():
    # 只生成一次，之后复用缓存
    if not app.openapi_schema:
        schema = get_openapi(
            title=app.title,
            version=app.version,
            description=app.description,
            routes=app.routes,
        )
        schema.setdefault("components", {})["securitySchemes"] = {"BearerAuth": BEARER_SCHEME}
        schema["security"] = [{"BearerAuth": []}]
        app.openapi_schema = schema
    return app.openapi_schema


app.openapi = openapi_with_bearer


def run() -> None:
    # 只在启动服务时配置 root logger
    logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)
    logger.info("Server running on http://localhost:%s", PORT)
    uvicorn.run("carechat.main:app", host="0.0.0.0", port=PORT)


if __name__ == "__main__":
    run()
