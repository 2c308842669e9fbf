#!/usr/bin/env python3
"""
Send one request through the machine API and print the JSON response.

Usage (from project root):
    python scripts/call.py TOKEN POST /machine/request L1 JOB-1
    python scripts/call.py TOKEN GET /machine/m1
    python scripts/call.py TOKEN POST /machine/m1/start

Adapters are picked from the environment, see src/factory.py:
    MACHINE_STORE_BACKEND, MACHINE_CACHE_BACKEND, DB_PATH,
    DEVICE_CHANNEL, SMART_MACHINE_API_URL, SMART_MACHINE_API_KEY,
    IDENTITY_CHANNEL, IDP_URL, VALID_TOKENS, HTTP_TIMEOUT
"""

import asyncio
import json
import logging
import os
import sys

# Allow running as `python scripts/call.py` from project root.
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from src.api import ApiRequest
from src.factory import build_api

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s  %(levelname)-7s  %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)


async def main() -> int:
    if len(sys.argv) < 4:
        print(__doc__)
        return 2

    token, method, path = sys.argv[1], sys.argv[2], sys.argv[3]
    body = {}
    if len(sys.argv) >= 6:
        body = {"locationId": sys.argv[4], "jobId": sys.argv[5]}

    api = build_api()
    result = await api.handle(ApiRequest(method=method, path=path, token=token, body=body))
    print(json.dumps(result.to_dict(), indent=2))
    return 0 if result.status_code < 400 else 1


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
