import uvicorn

from translate_proxy.config import load_settings


def main():
    settings = load_settings()
    uvicorn.run("translate_proxy.main:app", host="0.0.0.0", port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
