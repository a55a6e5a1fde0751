"""Main entry point for the reservation export API.

Usage:
    Development: uvicorn reszip.main:app --reload --port 8000
    Production: uvicorn reszip.main:app --host 0.0.0.0 --port 8000
"""

from reszip.api import create_app

# Settings are read from the environment (LUCEE_URL, PDF_USERNAME, ...)
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "reszip.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info",
    )
