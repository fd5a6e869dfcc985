import sys
import json
import logging
import argparse

from core.config_loader import load_config
from core.app_context import AppContext
from database.database import init_engine, init_db
from pipeline.runner import run_on_demand, run_posting_event

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def _load_events(path: str) -> list:
    """Read one posting event or a list of them from a JSON file ('-' for stdin)."""
    if path == '-':
        data = json.load(sys.stdin)
    else:
        with open(path, 'r') as f:
            data = json.load(f)
    if isinstance(data, dict):
        return data['data'] if isinstance(data.get('data'), list) else [data]
    return data


def cmd_init_db(config, args) -> int:
    init_db()
    return 0


def cmd_match_user(config, args) -> int:
    ctx = AppContext.build(config)
    try:
        result = run_on_demand(ctx, args.user_id, timeout=args.timeout)
    finally:
        ctx.close()

    if result.catalog_error:
        logger.error(f"Catalog unavailable: {result.catalog_error}")
        return 2
    if not result.success:
        logger.error(f"On-demand matching failed: {result.error}")
        return 1

    logger.info(
        f"User {args.user_id}: {len(result.matches)} new matches, "
        f"{result.notified_count} notifications sent"
    )
    for match in result.matches:
        print(f"{match.match_score:6.1f}  {match.job_post_id}  {match.job_title or ''}")
    return 0


def cmd_ingest(config, args) -> int:
    events = _load_events(args.file)
    ctx = AppContext.build(config)
    failures = 0
    try:
        for payload in events:
            result = run_posting_event(ctx, payload)
            if not result.success:
                failures += 1
    finally:
        ctx.close()

    logger.info(f"Processed {len(events)} posting events ({failures} failed)")
    return 1 if failures else 0


def cmd_serve(config, args) -> int:
    import uvicorn

    host = args.host or config.web.host
    port = args.port or config.web.port
    logger.info(f"Starting Job Match API on {host}:{port}")
    uvicorn.run("web.backend.app:app", host=host, port=port, reload=False, log_level="info")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Job Match engine")
    parser.add_argument('--config', default='config.yaml', help='Path to config.yaml')
    parser.add_argument('--verbose', action='store_true')
    subparsers = parser.add_subparsers(dest='command', required=True)

    subparsers.add_parser('init-db', help='Create database tables')

    match_user = subparsers.add_parser('match-user', help='Run on-demand matching for one user')
    match_user.add_argument('user_id')
    match_user.add_argument('--timeout', type=float, default=None,
                            help='Catalog request timeout in seconds')

    ingest = subparsers.add_parser('ingest', help='Process posting events from a JSON file')
    ingest.add_argument('file', help="JSON file with one event or a list ('-' for stdin)")

    serve = subparsers.add_parser('serve', help='Run the HTTP API')
    serve.add_argument('--host', default=None)
    serve.add_argument('--port', type=int, default=None)

    return parser


COMMANDS = {
    'init-db': cmd_init_db,
    'match-user': cmd_match_user,
    'ingest': cmd_ingest,
    'serve': cmd_serve,
}


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    config = load_config(args.config)
    init_engine(config.database.url)

    return COMMANDS[args.command](config, args)


if __name__ == "__main__":
    sys.exit(main())
