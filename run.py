"""
Run the triage API server.
Usage: python3 run.py   (from the project root; set PORT / DEBUG in .env to override)
"""
import uvicorn

from config import settings

if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
