#!/usr/bin/env python3
"""
Oficina Manager Entry Point

Run the application with:
    python run.py

Or with uvicorn directly:
    uvicorn oficina.main:app --reload --port 8000
"""
import uvicorn

from oficina.config import get_settings


def main():
    """Run the Oficina Manager server"""
    settings = get_settings()
    print("=" * 50)
    print(f"  {settings.APP_NAME} - Funilaria e Pintura")
    print("=" * 50)
    print(f"  Server: http://{settings.HOST}:{settings.PORT}")
    print(f"  Data:   {settings.DATA_DIR}")
    print(f"  Debug:  {settings.DEBUG}")
    print("=" * 50)
    print()

    uvicorn.run(
        "oficina.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG
    )


if __name__ == "__main__":
    main()
