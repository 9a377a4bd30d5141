import uvicorn

from pocketllm.config import settings


def main():
    uvicorn.run(
        "pocketllm.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
