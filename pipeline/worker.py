#!/usr/bin/env python3
"""
RQ Worker for posting events.

Processes queued posting events (streaming matching) from Redis.

Usage:
    python -m pipeline.worker
    python -m pipeline.worker --burst
    python -m pipeline.worker --verbose
"""

import sys
import argparse
import logging

from redis import Redis
from rq import Worker

from core.config_loader import load_config
from pipeline.queue import DEFAULT_REDIS_URL

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def start_worker(burst: bool = False, queues: list = None, config_path: str = "config.yaml"):
    """Start the RQ worker."""
    config = load_config(config_path)
    redis_url = config.queue.redis_url or DEFAULT_REDIS_URL

    if queues is None:
        queues = [config.queue.queue_name]

    logger.info("Starting RQ Worker")
    logger.info(f"Queues: {', '.join(queues)}")
    logger.info(f"Burst mode: {burst}")

    try:
        redis_conn = Redis.from_url(redis_url)
        redis_conn.ping()
        logger.info("Connected to Redis")

        worker = Worker(queues, connection=redis_conn)
        if burst:
            logger.info("Running in burst mode...")
            worker.work(burst=True)
        else:
            logger.info("Worker started. Press Ctrl+C to stop.")
            worker.work()
    except KeyboardInterrupt:
        logger.info("Worker stopped")
    except Exception as e:
        logger.error(f"Error: {e}")
        sys.exit(1)


def main():
    parser = argparse.ArgumentParser(description='Job Match posting-event worker')
    parser.add_argument('--burst', action='store_true', help='Process all and exit')
    parser.add_argument('--queues', nargs='+', default=None)
    parser.add_argument('--config', default='config.yaml')
    parser.add_argument('--verbose', action='store_true')

    args = parser.parse_args()

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    start_worker(burst=args.burst, queues=args.queues, config_path=args.config)


if __name__ == '__main__':
    main()
