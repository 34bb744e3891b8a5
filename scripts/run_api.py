#!/usr/bin/env python3
"""Запуск API сервера"""
import argparse
import sys
from pathlib import Path
sys.path.append(str(Path(__file__).parent.parent))

import uvicorn

from config.settings import settings


def main():
    parser = argparse.ArgumentParser(description="Time Tracker API server")
    parser.add_argument("--host", default=settings.HTTP_HOST, help="адрес для прослушивания")
    parser.add_argument("--port", type=int, default=settings.HTTP_PORT, help="порт")
    parser.add_argument("--reload", action="store_true", help="перезапуск при изменении кода")
    parser.add_argument("--version", action="store_true", help="показать версию и выйти")
    args = parser.parse_args()

    if args.version:
        from api.main import app
        print(f"version: {app.version}")
        return

    uvicorn.run("api.main:app", host=args.host, port=args.port, reload=args.reload, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
