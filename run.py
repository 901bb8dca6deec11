#!/usr/bin/env python3
"""
Development server runner
"""

import uvicorn

from quizapp.core.config import settings

if __name__ == "__main__":
    uvicorn.run(
        "quizapp.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.ENVIRONMENT == "development",
        log_level="debug" if settings.DEBUG else "info",
        access_log=True,
    )
