import os

import uvicorn

if __name__ == "__main__":
    port = int(os.environ.get("PORT", 8000))
    # Single worker: the shop snapshot and in-memory demo store live in
    # process memory, so extra workers would each see their own copy.
    workers = int(os.environ.get("WEB_CONCURRENCY", 1))
    uvicorn.run(
        "clearview.main:app",
        host="0.0.0.0",
        port=port,
        workers=workers,
    )
