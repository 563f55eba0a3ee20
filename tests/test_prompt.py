import asyncio
import unittest
from unittest.mock import MagicMock

from number_prompt.config import PromptConfig
from number_prompt.ui.core.callbacks import Callback, pending_tasks
from number_prompt.ui.core.events import Action, ActionType
from number_prompt.ui.core.prompt import CallbackNumberPrompt, NumberPrompt
from number_prompt.ui.core.registry import REGISTRY, InMemorySurfaceRegistry, UISurfaceRegistry
from number_prompt.ui.core.state import PromptState
from number_prompt.ui.core.targets import User


class FakeClock:
    def __init__(self, now: float = 0.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


class TestNumberPrompt(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.registry = InMemorySurfaceRegistry()
        self.user = User("ckey1")

    def make_prompt(self, **kwargs):
        kwargs.setdefault("registry", self.registry)
        prompt = NumberPrompt(self.user, "How many?", "Set count", 5, 1, 3, **kwargs)
        prompt.ui_interact()
        return prompt

    async def test_submit_within_bounds(self):
        prompt = self.make_prompt()
        self.assertTrue(prompt.ui_act("submit", {"entry": "12"}))
        self.assertEqual(prompt.entry, "12")
        self.assertEqual(prompt.state, PromptState.RESOLVED)
        self.assertTrue(prompt.closed)
        await asyncio.wait_for(prompt.wait(), 1)

    async def test_submit_out_of_bounds_stays_open(self):
        prompt = self.make_prompt()
        self.assertFalse(prompt.ui_act("submit", {"entry": ""}))
        self.assertFalse(prompt.ui_act("submit", {"entry": "1234"}))
        self.assertFalse(prompt.ui_act("submit", {}))
        self.assertTrue(prompt.is_open)
        self.assertIsNone(prompt.entry)
        self.assertFalse(prompt.closed)
        self.assertEqual(len(self.registry.surfaces_for(prompt)), 1)

    async def test_resolves_only_once(self):
        prompt = self.make_prompt()
        self.assertTrue(prompt.ui_act("submit", {"entry": "12"}))
        self.assertFalse(prompt.ui_act("submit", {"entry": "3"}))
        self.assertFalse(prompt.ui_act("cancel"))
        self.assertEqual(prompt.entry, "12")

    async def test_cancel(self):
        prompt = self.make_prompt()
        self.assertTrue(prompt.handle_action(Action(ActionType.CANCEL)))
        self.assertIsNone(prompt.entry)
        self.assertEqual(prompt.state, PromptState.CANCELLED)
        await asyncio.wait_for(prompt.wait(), 1)

    async def test_cancel_without_surface_still_wakes_waiter(self):
        prompt = NumberPrompt(self.user, "m", "t", registry=self.registry)
        self.assertTrue(prompt.ui_act("cancel"))
        await asyncio.wait_for(prompt.wait(), 1)

    async def test_unknown_action(self):
        prompt = self.make_prompt()
        self.assertFalse(prompt.ui_act("explode", {"entry": "1"}))
        self.assertTrue(prompt.is_open)

    async def test_user_closes_window(self):
        prompt = self.make_prompt()
        self.registry.close_all(prompt)
        self.assertTrue(prompt.closed)
        self.assertIsNone(prompt.entry)
        self.assertEqual(prompt.state, PromptState.CANCELLED)
        await asyncio.wait_for(prompt.wait(), 1)

    async def test_destroy_is_idempotent(self):
        registry = MagicMock(spec=UISurfaceRegistry)
        prompt = NumberPrompt(self.user, "m", "t", timeout=5, registry=registry)
        prompt.destroy()
        prompt.destroy()
        registry.close_all.assert_called_once_with(prompt)
        self.assertTrue(prompt.destroyed)
        self.assertEqual(prompt.state, PromptState.DESTROYED)
        self.assertIsNone(prompt._timer)
        await asyncio.wait_for(prompt.wait(), 1)

    async def test_destroy_keeps_terminal_state(self):
        prompt = self.make_prompt()
        prompt.ui_act("submit", {"entry": "7"})
        prompt.destroy()
        self.assertEqual(prompt.state, PromptState.RESOLVED)
        self.assertEqual(prompt.entry, "7")

    async def test_timeout_destroys_prompt(self):
        prompt = self.make_prompt(timeout=0.05)
        await asyncio.wait_for(prompt.wait(), 1)
        self.assertTrue(prompt.destroyed)
        self.assertIsNone(prompt.entry)
        self.assertEqual(prompt.state, PromptState.TIMED_OUT)
        self.assertEqual(self.registry.surfaces_for(prompt), [])

    async def test_timeout_after_destroy_is_harmless(self):
        prompt = self.make_prompt(timeout=5)
        prompt.destroy()
        prompt._on_timeout()
        self.assertEqual(prompt.state, PromptState.DESTROYED)

    async def test_ui_data_progress(self):
        clock = FakeClock(50.0)
        prompt = self.make_prompt(timeout=10, clock=clock)
        self.assertEqual(prompt.ui_data()["timeout"], 1.0)
        clock.now = 59.0
        self.assertEqual(prompt.ui_data()["timeout"], 0.0)
        prompt.destroy()

    async def test_ui_data_uses_config_offset(self):
        clock = FakeClock(0.0)
        config = PromptConfig(latency_offset_seconds=0.0)
        prompt = self.make_prompt(timeout=4, clock=clock, config=config)
        clock.now = 1.0
        self.assertEqual(prompt.ui_data()["timeout"], 0.75)
        prompt.destroy()

    async def test_refresh_updates_surface(self):
        clock = FakeClock(0.0)
        prompt = self.make_prompt(timeout=10, clock=clock)
        clock.now = 4.0
        surface, = self.registry.refresh(prompt)
        self.assertAlmostEqual(surface.data["timeout"], 5 / 9)
        prompt.destroy()

    def test_timeout_requires_running_loop(self):
        with self.assertRaises(RuntimeError):
            NumberPrompt(self.user, "m", "t", timeout=1, registry=self.registry)

    def test_defaults_to_global_registry(self):
        prompt = NumberPrompt(self.user, "m", "t")
        self.assertIs(prompt.registry, REGISTRY)
        self.assertEqual(prompt.config, PromptConfig())


class TestCallbackNumberPrompt(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.registry = InMemorySurfaceRegistry()
        self.user = User("ckey1")
        self.received = []

    def make_prompt(self, **kwargs):
        prompt = CallbackNumberPrompt(
            self.user, "How many?", "Set count", 5, 1, 3,
            callback=Callback(self.received.append),
            registry=self.registry,
            **kwargs,
        )
        prompt.ui_interact()
        return prompt

    async def test_submit_invokes_callback_once(self):
        prompt = self.make_prompt()
        self.assertTrue(prompt.ui_act("submit", {"entry": "7"}))
        self.assertFalse(prompt.ui_act("submit", {"entry": "8"}))
        await asyncio.sleep(0)
        self.assertEqual(self.received, ["7"])
        self.assertEqual(prompt.invocations, 1)
        self.assertTrue(prompt.destroyed)
        self.assertIsNone(prompt.callback)

    async def test_cancel_never_invokes_callback(self):
        prompt = self.make_prompt()
        self.assertTrue(prompt.ui_act("cancel"))
        await asyncio.sleep(0)
        self.assertEqual(self.received, [])
        self.assertTrue(prompt.destroyed)
        self.assertIsNone(prompt.callback)

    async def test_window_close_destroys(self):
        prompt = self.make_prompt()
        self.registry.close_all(prompt)
        self.assertTrue(prompt.destroyed)
        self.assertEqual(prompt.state, PromptState.CANCELLED)
        self.assertIsNone(prompt.callback)

    async def test_rejected_entry_keeps_callback(self):
        prompt = self.make_prompt()
        self.assertFalse(prompt.ui_act("submit", {"entry": "12345"}))
        await asyncio.sleep(0)
        self.assertEqual(self.received, [])
        self.assertIsNotNone(prompt.callback)
        self.assertFalse(prompt.destroyed)

    async def test_timeout_releases_callback(self):
        prompt = self.make_prompt(timeout=0.05)
        await asyncio.sleep(0.15)
        self.assertTrue(prompt.destroyed)
        self.assertEqual(prompt.state, PromptState.TIMED_OUT)
        self.assertIsNone(prompt.callback)
        self.assertEqual(self.received, [])

    async def test_double_destroy_after_submit(self):
        prompt = self.make_prompt()
        prompt.ui_act("submit", {"entry": "7"})
        prompt.destroy()
        prompt.destroy()
        await asyncio.sleep(0)
        self.assertEqual(self.received, ["7"])

    def test_requires_running_loop(self):
        with self.assertRaises(RuntimeError):
            CallbackNumberPrompt(
                self.user, "How many?", "Set count",
                callback=Callback(self.received.append), registry=self.registry,
            )
        self.assertEqual(self.registry.surfaces_for_user(self.user), [])

    async def test_failed_scheduling_still_tears_down(self):
        class BrokenCallback(Callback):
            def invoke_async(self, *args):
                raise RuntimeError("scheduler gone")

        prompt = CallbackNumberPrompt(
            self.user, "How many?", "Set count",
            callback=BrokenCallback(self.received.append), registry=self.registry,
        )
        prompt.ui_interact()
        with self.assertRaises(RuntimeError):
            prompt.ui_act("submit", {"entry": "7"})
        self.assertEqual(prompt.state, PromptState.RESOLVED)
        self.assertTrue(prompt.closed)
        self.assertTrue(prompt.destroyed)
        self.assertTrue(prompt._done.is_set())
        self.assertEqual(self.registry.surfaces_for(prompt), [])

    async def test_failing_coroutine_callback_is_logged(self):
        async def handler(value):
            raise ValueError(f"bad entry {value}")

        prompt = CallbackNumberPrompt(
            self.user, "How many?", "Set count",
            callback=Callback(handler), registry=self.registry,
        )
        prompt.ui_interact()
        with self.assertLogs("number_prompt.callbacks", level="ERROR") as logs:
            self.assertTrue(prompt.ui_act("submit", {"entry": "7"}))
            for _ in range(3):
                await asyncio.sleep(0)
        self.assertIn("bad entry 7", logs.output[0])
        self.assertEqual(pending_tasks(), set())

    async def test_wait_returns_immediately(self):
        prompt = self.make_prompt()
        await asyncio.wait_for(prompt.wait(), 0.1)
        self.assertTrue(prompt.is_open)
        prompt.destroy()


if __name__ == '__main__':
    unittest.main()
