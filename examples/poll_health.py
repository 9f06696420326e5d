"""Poll an HTTP health endpoint with a timer configured from the environment."""

import logging
import sys

import httpx

from retle import Context, ExpTimer, RetleConfig, RetleError
from retle.adapters.http import HttpOperation


def main(url: str) -> int:
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    timer = ExpTimer.from_config(RetleConfig.from_env())

    with httpx.Client(timeout=5.0) as client, Context.with_timeout(60) as ctx:
        operation = HttpOperation(client, "GET", url)
        try:
            timer.retry(ctx, operation)
        except RetleError as exc:
            print("Endpoint did not become healthy:", exc)
            return 1
    print("Healthy after", operation.attempts, "attempts")
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1] if len(sys.argv) > 1 else "http://localhost:8000/health"))
