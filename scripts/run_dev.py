"""Development entry point: ``python scripts/run_dev.py [--host H] [--port P]``."""

import argparse
import os

from app import create_app


def _default_port() -> int:
    value = os.getenv("SCANCAL_PORT") or os.getenv("PORT") or "5001"
    try:
        return int(value)
    except ValueError as exc:
        raise SystemExit(f"Invalid port '{value}'. Set SCANCAL_PORT to a number.") from exc


def main() -> None:
    parser = argparse.ArgumentParser(description="Run the ScanCal development server")
    parser.add_argument("--host", default=os.getenv("SCANCAL_HOST", "127.0.0.1"))
    parser.add_argument("--port", type=int, default=None)
    parser.add_argument("--config", default=None, help="Config class name, e.g. TestingConfig")
    args = parser.parse_args()

    app = create_app(args.config)
    app.run(host=args.host, port=args.port or _default_port(), debug=False)


if __name__ == "__main__":
    main()
