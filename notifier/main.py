import argparse
import logging
import time

from .scheduler import check_deadlines, start_scheduler, stop_scheduler

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def start_worker():
    """
    Run the scheduler until interrupted. The first pass runs immediately so
    a restart never waits a full interval.
    """
    check_deadlines()
    start_scheduler()
    try:
        while True:
            time.sleep(60)
    except (KeyboardInterrupt, SystemExit):
        stop_scheduler()


def main(argv=None):
    parser = argparse.ArgumentParser(description="Deadline Guardian notification worker")
    parser.add_argument("--once", action="store_true", help="run a single notification pass and exit")
    args = parser.parse_args(argv)

    if args.once:
        result = check_deadlines()
        logger.info(f"Run result: {result.dict()}")
        return 0 if result.success else 1

    start_worker()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
