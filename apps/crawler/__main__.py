"""
Crawler Module Entry Point

Allows execution via: python -m apps.crawler

Delegates to scheduler for all execution modes (RUN_ONCE and scheduled).
"""

import asyncio

from apps.crawler.scheduler import main

if __name__ == "__main__":
    asyncio.run(main())
