"""
Main CLI Entry Point

Clarvoy decision service CLI: run the API server, prepare the database and
compute judgment noise from the command line.
"""

import argparse
import json
import logging
import sys
from typing import List, Optional

from src.config.settings import get_settings
from src.core.variance_engine import calculate_variance, describe_noise


# Logging setup
def setup_logging(debug: bool = False, level_name: Optional[str] = None):
    """Configure root logging to stdout"""
    if debug:
        level = logging.DEBUG
    else:
        level = getattr(logging, (level_name or 'INFO').upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(
        fmt='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    ))

    logging.basicConfig(
        level=level,
        handlers=[handler],
        force=True  # Replace existing handlers
    )


def cmd_serve(args):
    """Run the API server"""
    import uvicorn

    uvicorn.run('src.web.app:app', host=args.host, port=args.port, reload=args.reload)
    return 0


def cmd_init_db(args):
    """Create tables for the configured database"""
    from src.models.database import create_tables, init_database

    logger = logging.getLogger(__name__)
    settings = get_settings()

    init_database(database_url=settings.database_url, echo=settings.database_echo)
    create_tables()

    logger.info(f"Database ready: {settings.database_url}")
    print(f"Tables created for {settings.database_url}")
    return 0


def cmd_variance(args):
    """Print the noise summary of the given scores as JSON"""
    threshold = args.threshold if args.threshold is not None else get_settings().high_noise_threshold
    result = calculate_variance(args.scores, high_noise_threshold=threshold)

    print(json.dumps(result.to_dict(), indent=2))
    if args.verbose:
        print(describe_noise(result), file=sys.stderr)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Clarvoy Decision Service',
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    parser.add_argument(
        '--debug',
        action='store_true',
        help='Enable debug logging'
    )

    # Create subparsers
    subparsers = parser.add_subparsers(dest='command', help='Command to execute')

    # ========== serve ==========
    serve_parser = subparsers.add_parser('serve', help='Run the HTTP API server')
    serve_parser.add_argument('--host', default='127.0.0.1', help='Bind address')
    serve_parser.add_argument('--port', type=int, default=8000, help='Bind port')
    serve_parser.add_argument('--reload', action='store_true', help='Reload on code changes')

    # ========== init-db ==========
    subparsers.add_parser('init-db', help='Create database tables')

    # ========== variance ==========
    variance_parser = subparsers.add_parser(
        'variance',
        help='Compute judgment noise for a list of scores',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Example:
  python -m src.main variance 1 10 1 10
  python -m src.main variance 4 5 6 --threshold 0.5
"""
    )
    variance_parser.add_argument('scores', nargs='+', type=float, help='Judgment scores')
    variance_parser.add_argument('--threshold', type=float, help='High-noise threshold (default from settings)')
    variance_parser.add_argument('-v', '--verbose', action='store_true', help='Also print a summary line')

    return parser


def main(argv: Optional[List[str]] = None):
    """Main function"""
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.debug, get_settings().log_level)
    logger = logging.getLogger(__name__)

    # Show help if no command
    if not args.command:
        parser.print_help()
        return 0

    try:
        # Command dispatch
        if args.command == 'serve':
            return cmd_serve(args)
        elif args.command == 'init-db':
            return cmd_init_db(args)
        elif args.command == 'variance':
            return cmd_variance(args)

    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130

    except Exception as e:
        logger.error(f"Unexpected error: {e}", exc_info=True)
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
