"""
Kiosk Bot server entry point.

Run with:
    uvicorn kiosk_bot.main:app --reload
or:
    python -m kiosk_bot.main
"""

import os

from .app_factory import create_app

app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "kiosk_bot.main:app",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8000")),
    )
