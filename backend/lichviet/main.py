"""
Lịch Vạn Niên API - Main App
━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
- /api/v1/calendar/*: âm lịch, can chi, giờ tốt xấu
- /api/v1/quote: ca dao tục ngữ
- /api/v1/advice: lời khuyên từ LLM (có fallback)
━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
"""
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from lichviet import __version__
from lichviet.config import get_settings
from lichviet.routers import advice, calendar

settings = get_settings()

logging.basicConfig(level=getattr(logging, settings.log_level.upper(), logging.INFO))
logger = logging.getLogger(__name__)

app = FastAPI(title="Lịch Vạn Niên", version=__version__)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(calendar.router, prefix="/api/v1", tags=["Calendar"])
app.include_router(advice.router, prefix="/api/v1", tags=["Advice"])


@app.get("/health")
async def health():
    return {"status": "ok"}


@app.get("/")
async def root():
    return {"service": "Lịch Vạn Niên", "status": "running", "version": __version__}


@app.on_event("startup")
async def startup():
    logger.info("━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━")
    logger.info(f"🚀 Lịch Vạn Niên v{__version__} | model={settings.openai_model}")
    logger.info(f"   OpenAI key: {'set' if settings.openai_api_key else 'missing (fallback advice only)'}")
    logger.info("━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━")


@app.exception_handler(Exception)
async def error_handler(request: Request, exc: Exception):
    logger.error(f"Error: {type(exc).__name__}: {exc}")
    return JSONResponse(status_code=500, content={"error": str(exc)[:100]})


def run():
    import uvicorn
    uvicorn.run("lichviet.main:app", host=settings.host, port=settings.port, reload=settings.debug)


if __name__ == "__main__":
    run()
