#!/usr/bin/env python3
"""
Run script for the Solace API Gateway
"""
import uvicorn

from solace_gateway.config.settings import settings
from solace_gateway.main import app

if __name__ == "__main__":
    uvicorn.run(app, host=settings.host, port=settings.port, reload=settings.debug)
