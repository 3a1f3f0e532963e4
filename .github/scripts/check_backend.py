# Needs httpx: pip install -e ".[dev]"
import os
import sys
import httpx

base = os.getenv("BACKEND_BASE_URL", "http://127.0.0.1:3000")

try:
    r = httpx.get(f"{base}/health", timeout=5.0)
    print('STATUS', r.status_code)
    print(r.text)
except httpx.HTTPError as e:
    print('HTTP check failed:', e)
    sys.exit(1)
