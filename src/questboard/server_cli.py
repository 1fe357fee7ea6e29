"""CLI entry point for the quest board API server."""

import argparse
import os


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="questboard-server",
        description="Quest board API server",
    )
    parser.add_argument("--host", default="0.0.0.0", help="Bind host (default: 0.0.0.0)")
    parser.add_argument("--port", type=int, default=8080, help="Bind port (default: 8080)")
    parser.add_argument("--local", action="store_true", help="Use a local SQLite database")
    parser.add_argument("--start-day", type=int, help="Calendar day to start from when none is stored")
    args = parser.parse_args(argv)

    # Settings are read at import time, so set the environment first
    if args.local:
        os.environ["QUESTBOARD_LOCAL_MODE"] = "1"
    if args.start_day is not None:
        os.environ["QUESTBOARD_START_DAY"] = str(args.start_day)

    import uvicorn

    uvicorn.run("questboard.main:app", host=args.host, port=args.port)


if __name__ == "__main__":
    main()
