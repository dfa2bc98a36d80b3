import os

import uvicorn

if __name__ == "__main__":
    port = int(os.environ.get("PORT", 8000))
    # Requests share no state, so any worker count works
    workers = int(os.environ.get("WEB_CONCURRENCY", 1))
    uvicorn.run(
        "vehicle_fitment.main:app",
        host="0.0.0.0",
        port=port,
        workers=workers,
    )
