#!/usr/bin/env python3
"""Run script for the tdreport API."""

import uvicorn

if __name__ == "__main__":
    uvicorn.run(
        "tdreport.api.app:app",
        host="127.0.0.1",
        port=8000,
        reload=True
    )
