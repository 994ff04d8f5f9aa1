# main.py

from uvicorn import run

from inkwell.configs import settings


def main() -> None:
    run(
        "inkwell.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.ENVIRONMENT == "development",
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
