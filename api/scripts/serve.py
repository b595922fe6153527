import argparse
import os
from pathlib import Path

import uvicorn

API_DIR = Path(__file__).resolve().parents[1]


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Serve the match API")
    parser.add_argument("--host", default=os.getenv("HOST", "0.0.0.0"))
    parser.add_argument("--port", type=int, default=int(os.getenv("PORT", "8000")))
    parser.add_argument("--reload", action="store_true")
    args = parser.parse_args(argv)

    uvicorn.run("app.main:app", host=args.host, port=args.port, reload=args.reload, app_dir=str(API_DIR))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
