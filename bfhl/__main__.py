import uvicorn

from .config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run("bfhl.main:app", host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    main()
