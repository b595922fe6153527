import argparse
import json
import sys
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[1]))

from app.config import load_settings
from app.database import open_session
from app.main import configure_logging
from app.services.lifecycle import expire_matches
from app.services.matching import generate_match


def main() -> int:
    parser = argparse.ArgumentParser(description="Run one matchmaking job (for cron / scheduled triggers)")
    parser.add_argument("job", choices=["match", "expire"])
    parser.add_argument("--repeat", type=int, default=1, help="number of matchNow runs in a row")
    args = parser.parse_args()

    settings = load_settings()
    configure_logging(settings.log_level)

    results = []
    for _ in range(max(1, args.repeat) if args.job == "match" else 1):
        with open_session(settings) as db:
            if args.job == "match":
                result = generate_match(db, settings=settings)
                results.append(result.as_payload())
                if result.match is None:
                    break
            else:
                results.append({"ok": True, **expire_matches(db)})

    print(json.dumps(results, ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
