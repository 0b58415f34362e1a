import uvicorn

from mock_interview.config import get_settings

if __name__ == "__main__":
    settings = get_settings()
    uvicorn.run(
        "mock_interview.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower(),
    )
