"""Tests for the bounded polling helper."""

import unittest

from careerbot.utils.polling import PollExhausted, PollFailed, Poller, PollPolicy
from helpers import Sleeper


def sequence(*values):
    it = iter(values)

    async def fetch():
        value = next(it)
        if isinstance(value, Exception):
            raise value
        return value

    return fetch


class TestPoller(unittest.IsolatedAsyncioTestCase):
    async def test_returns_first_accepted_result(self):
        sleep = Sleeper()
        poller = Poller(
            fetch_result=sequence([], [], ["item"]),
            is_done=bool,
            policy=PollPolicy(interval=5, max_attempts=10),
            sleep=sleep,
        )

        self.assertEqual(await poller.run(), ["item"])
        self.assertEqual(sleep.delays, [5, 5, 5])

    async def test_exhausts_after_max_attempts(self):
        sleep = Sleeper()
        poller = Poller(
            fetch_result=sequence(*([[]] * 4)),
            is_done=bool,
            policy=PollPolicy(interval=5, max_attempts=4),
            sleep=sleep,
        )

        with self.assertRaises(PollExhausted) as ctx:
            await poller.run()
        self.assertEqual(ctx.exception.attempts, 4)
        self.assertEqual(len(sleep.delays), 4)

    async def test_failure_status_stops_polling(self):
        poller = Poller(
            fetch_result=sequence([], []),
            is_done=bool,
            policy=PollPolicy(interval=0, max_attempts=10),
            fetch_status=sequence("RUNNING", "FAILED"),
            is_failed=lambda status: status == "FAILED",
            sleep=Sleeper(),
        )

        with self.assertRaises(PollFailed) as ctx:
            await poller.run()
        self.assertEqual(ctx.exception.status, "FAILED")

    async def test_fetch_errors_spend_an_attempt(self):
        poller = Poller(
            fetch_result=sequence(RuntimeError("boom"), ["ok"]),
            is_done=bool,
            policy=PollPolicy(interval=0, max_attempts=2),
            sleep=Sleeper(),
        )

        self.assertEqual(await poller.run(), ["ok"])

    async def test_backoff_is_capped(self):
        sleep = Sleeper()
        poller = Poller(
            fetch_result=sequence(*([[]] * 5)),
            is_done=bool,
            policy=PollPolicy(interval=1, max_attempts=5, backoff=2, max_interval=5),
            sleep=sleep,
        )

        with self.assertRaises(PollExhausted):
            await poller.run()
        self.assertEqual(sleep.delays, [1, 1, 2, 4, 5])

    async def test_errors_outside_retry_on_propagate(self):
        poller = Poller(
            fetch_result=sequence(KeyError("bad payload"), ["never"]),
            is_done=bool,
            policy=PollPolicy(interval=0, max_attempts=5),
            retry_on=(ValueError,),
            sleep=Sleeper(),
        )

        with self.assertRaises(KeyError):
            await poller.run()

    async def test_errors_on_last_attempt_count_as_exhaustion(self):
        poller = Poller(
            fetch_result=sequence([], ValueError("not json")),
            is_done=bool,
            policy=PollPolicy(interval=0, max_attempts=2),
            retry_on=(ValueError,),
            sleep=Sleeper(),
        )

        with self.assertRaises(PollExhausted) as ctx:
            await poller.run()
        self.assertEqual(ctx.exception.attempts, 2)


if __name__ == "__main__":
    unittest.main()
