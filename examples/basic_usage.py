"""Basic retry example using the default backoff timer."""

import random

import retle


def main() -> None:
    attempts = {"count": 0}

    def flaky_job():
        attempts["count"] += 1
        if random.random() < 0.7:
            return True, RuntimeError("job not ready")
        return False, None

    with retle.Context.with_timeout(10) as ctx:
        try:
            retle.retry(ctx, flaky_job)
        except retle.DeadlineExceededError:
            print("Gave up after", attempts["count"], "attempts")
            return
    print("Job finished after", attempts["count"], "attempts")


if __name__ == "__main__":
    main()
