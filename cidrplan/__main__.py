"""Run the API with Uvicorn: ``python -m cidrplan``."""

import uvicorn

from .config import get_host, get_log_level, get_port


def main():
    uvicorn.run("cidrplan.main:app", host=get_host(), port=get_port(), log_level=get_log_level().lower())


if __name__ == "__main__":
    main()
