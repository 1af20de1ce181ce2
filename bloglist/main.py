from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from bloglist.auth.routes import router as login_router
from bloglist.blog.routes import router as blog_router
from bloglist.database.connection import connect, ensure_indexes
from bloglist.errors import register_exception_handlers
from bloglist.users.routes import router as users_router
from bloglist.utils import config
from bloglist.utils.logger import setup_logging
from bloglist.utils.middleware import RequestLoggerMiddleware

setup_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    client = connect(config.MONGODB_URI, config.MONGO_DB_NAME)
    app.state.db = client[config.MONGO_DB_NAME]
    ensure_indexes(app.state.db)
    try:
        yield
    finally:
        client.close()


app = FastAPI(title="Bloglist API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestLoggerMiddleware)

register_exception_handlers(app)

app.include_router(blog_router, prefix="/api/blogs", tags=["blogs"])
app.include_router(users_router, prefix="/api/users", tags=["users"])
app.include_router(login_router, prefix="/api/login", tags=["login"])
