# carechat/db.py
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base

from carechat.config import DATABASE_URL


def make_engine(url: str):
    # SQLite 多线程访问需要 check_same_thread=False（FastAPI 常见）
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    return create_engine(url, connect_args=connect_args)


engine = make_engine(DATABASE_URL)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    # 每个请求一个 session，请求结束自动关闭
    with SessionLocal() as db:
        yield db
