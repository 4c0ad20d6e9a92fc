import argparse
import logging
import sys
from typing import Optional

from deploy_webhook.config import load_settings
from deploy_webhook.models import ConfigError
from deploy_webhook.services import discover_services
from server import create_app

LOG_FORMAT = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"

def setup_logging(log_file: Optional[str] = None, log_level: str = "INFO") -> None:
    if log_file:
        # File gets everything, errors are also echoed to the console
        console = logging.StreamHandler(sys.stderr)
        console.setLevel(logging.ERROR)
        handlers = [logging.FileHandler(log_file, mode="a", encoding="utf-8"), console]
    else:
        handlers = [logging.StreamHandler(sys.stderr)]
    logging.basicConfig(level=log_level, format=LOG_FORMAT, handlers=handlers, force=True)

def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Pull an image and restart its compose service on request")
    parser.add_argument("--host", help="Bind address (default: HOST or 0.0.0.0)")
    parser.add_argument("--port", type=int, help="Port (default: PORT or 8088)")
    parser.add_argument("--check", action="store_true", help="Validate configuration and exit")
    args = parser.parse_args(argv)

    setup_logging()
    try:
        settings = load_settings()
        setup_logging(settings.log_file, settings.log_level)
        services = discover_services(settings.services_dir)
    except ConfigError as e:
        logging.error(str(e))
        return 1

    if args.host:
        settings.host = args.host
    if args.port is not None:
        settings.port = args.port

    if args.check:
        print(f"Services: {', '.join(services) or '(none)'}")
        print(f"Tags: {', '.join(settings.accepted_tags)}")
        return 0

    app = create_app(settings, services)
    logging.info(f"Server listening on {settings.host}:{settings.port}")
    app.run(host=settings.host, port=settings.port)
    return 0

if __name__ == "__main__":
    sys.exit(main())
