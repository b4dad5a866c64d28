"""
Bookstore 主应用入口
"""
import logging
from contextlib import asynccontextmanager
from datetime import datetime
from fastapi import FastAPI
from bookstore import __version__
from bookstore.config import settings
from bookstore.database import init_db
from bookstore.routers import books, authors, publishers, users

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """应用生命周期管理"""
    # 启动时初始化数据库
    init_db()
    logger.info(f"{settings.APP_NAME} started, database: {settings.DATABASE_URL}")
    yield
    logger.info(f"{settings.APP_NAME} stopped")


app = FastAPI(
    title=settings.APP_NAME,
    description="图书目录服务：书籍、作者/译者、出版社及用户管理",
    version=__version__,
    debug=settings.DEBUG,
    lifespan=lifespan,
)

app.include_router(books.router)
app.include_router(authors.router)
app.include_router(publishers.router)
app.include_router(users.router)


@app.get("/")
def root():
    """根路径"""
    return {
        "name": settings.APP_NAME,
        "version": __version__,
    }


@app.get("/health")
def health_check():
    """健康检查"""
    return {"status": "ok", "timestamp": datetime.now().isoformat()}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("bookstore.main:app", host="0.0.0.0", port=8000, reload=settings.DEBUG)
