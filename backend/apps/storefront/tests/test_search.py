import asyncio
import unittest

from apps.storefront.search import SearchDebouncer


class SearchDebouncerTests(unittest.IsolatedAsyncioTestCase):
    async def asyncSetUp(self):
        self.sent = []
        self.applied = []

    async def _echo(self, text):
        self.sent.append(text)
        return text.upper()

    def _apply(self, text, result):
        self.applied.append((text, result))

    async def test_only_last_keystroke_is_sent(self):
        debouncer = SearchDebouncer(self._echo, self._apply, delay_ms=20)
        for text in ("b", "bo", "bon"):
            debouncer.submit(text)
        self.assertTrue(debouncer.pending)
        await debouncer.drain()
        self.assertEqual(self.sent, ["bon"])
        self.assertEqual(self.applied, [("bon", "BON")])
        self.assertFalse(debouncer.pending)

    async def test_nothing_is_sent_before_quiet_period(self):
        debouncer = SearchDebouncer(self._echo, self._apply, delay_ms=200)
        debouncer.submit("chair")
        await asyncio.sleep(0.02)
        self.assertEqual(self.sent, [])
        debouncer.cancel()
        self.assertFalse(debouncer.pending)

    async def test_spaced_keystrokes_each_dispatch(self):
        debouncer = SearchDebouncer(self._echo, self._apply, delay_ms=5)
        debouncer.submit("a")
        await debouncer.drain()
        debouncer.submit("ab")
        await debouncer.drain()
        self.assertEqual(self.sent, ["a", "ab"])

    async def test_stale_response_is_discarded(self):
        gates = {"slow": asyncio.Event(), "fast": asyncio.Event()}

        async def perform(text):
            await gates[text].wait()
            return text

        debouncer = SearchDebouncer(perform, self._apply, delay_ms=1)
        debouncer.submit("slow")
        await asyncio.sleep(0.02)
        debouncer.submit("fast")
        await asyncio.sleep(0.02)
        self.assertEqual(debouncer.in_flight, 2)

        gates["fast"].set()
        await asyncio.sleep(0)
        await asyncio.sleep(0)
        gates["slow"].set()
        await debouncer.drain()

        self.assertEqual(self.applied, [("fast", "fast")])

    async def test_in_order_responses_are_all_applied(self):
        debouncer = SearchDebouncer(self._echo, self._apply, delay_ms=1)
        debouncer.submit("a")
        await debouncer.drain()
        debouncer.submit("b")
        await debouncer.drain()
        self.assertEqual([text for text, _ in self.applied], ["a", "b"])
