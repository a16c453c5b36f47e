import io
import unittest
from contextlib import redirect_stderr, redirect_stdout

from hanziquiz.app import explain
from hanziquiz.app.events import EventBus
from hanziquiz.character import parse_char_data
from hanziquiz.policy import HintAfterMisses
from hanziquiz.quiz import Quiz, QuizParams, StrokeData
from tests.helpers import (
    CROSS_JSON,
    FAR_AWAY,
    HORIZONTAL,
    LOW_HORIZONTAL,
    TWO_BARS_JSON,
    VERTICAL,
    to_surface,
)


class Recorder:
    """Collects quiz callbacks in call order."""

    def __init__(self) -> None:
        self.calls = []

    def on_mistake(self, data: StrokeData) -> None:
        self.calls.append(("mistake", data))

    def on_correct_stroke(self) -> None:
        self.calls.append(("correct", None))

    def on_complete(self, summary) -> None:
        self.calls.append(("complete", summary))

    def params(self, **kwargs) -> QuizParams:
        return QuizParams(
            on_mistake=self.on_mistake,
            on_correct_stroke=self.on_correct_stroke,
            on_complete=self.on_complete,
            **kwargs,
        )

    def kinds(self):
        return [kind for kind, _ in self.calls]


class QuizTests(unittest.TestCase):
    def setUp(self) -> None:
        self.cross = parse_char_data("十", CROSS_JSON)
        self.cancels = []
        self.bus = EventBus()
        self.quiz = Quiz(self.cross, cancel_animation=lambda: self.cancels.append(1), bus=self.bus)
        self.rec = Recorder()

    def test_start_without_character_is_ignored(self) -> None:
        quiz = Quiz(None, symbol="十")
        err = io.StringIO()
        with redirect_stderr(err):
            self.assertFalse(quiz.start())
        self.assertIn("WARNING", err.getvalue())
        self.assertFalse(quiz.state.active)

    def test_check_without_active_quiz_is_ignored(self) -> None:
        self.assertIsNone(self.quiz.check(to_surface(HORIZONTAL)))
        self.assertFalse(self.quiz.state.active)
        self.assertEqual(dict(self.quiz.state.mistakes), {})

    def test_start_cancels_animation_and_clamps_start_stroke(self) -> None:
        self.assertTrue(self.quiz.start(QuizParams(quiz_start_stroke_num=5)))
        self.assertEqual(self.cancels, [1])
        self.assertTrue(self.quiz.state.active)
        self.assertEqual(self.quiz.state.index, 1)
        self.quiz.start(QuizParams(quiz_start_stroke_num=-3))
        self.assertEqual(self.quiz.state.index, 0)

    def test_correct_strokes_complete_once(self) -> None:
        self.quiz.start(self.rec.params())
        self.assertTrue(self.quiz.check(to_surface(HORIZONTAL)).is_match)
        self.assertEqual(self.quiz.state.index, 1)
        self.assertTrue(self.quiz.check(to_surface(VERTICAL)).is_match)

        self.assertEqual(self.rec.kinds(), ["correct", "correct", "complete"])
        self.assertEqual(self.rec.calls[-1][1], {"character": "十", "total_mistakes": 0})
        state = self.quiz.state
        self.assertFalse(state.active)
        self.assertEqual(state.index, 0)
        self.assertEqual(dict(state.mistakes), {})
        self.assertIsNone(state.params)

        # Nothing more happens once complete
        self.assertIsNone(self.quiz.check(to_surface(VERTICAL)))
        self.assertEqual(self.rec.kinds().count("complete"), 1)

    def test_mistakes_are_counted_per_stroke(self) -> None:
        self.quiz.start(self.rec.params())
        self.assertFalse(self.quiz.check(to_surface(FAR_AWAY)).is_match)
        self.quiz.check(to_surface(FAR_AWAY))
        _, second = self.rec.calls[-1]
        self.assertEqual(second.stroke_num, 0)
        self.assertEqual(second.mistakes_on_stroke, 2)
        self.assertEqual(second.total_mistakes, 1)
        self.assertEqual(second.strokes_remaining, 2)
        self.assertFalse(second.is_backwards)
        self.assertEqual(self.quiz.state.index, 0)

        self.quiz.check(to_surface(HORIZONTAL))
        self.quiz.check(to_surface(FAR_AWAY))
        _, third = self.rec.calls[-1]
        self.assertEqual((third.stroke_num, third.mistakes_on_stroke, third.total_mistakes), (1, 1, 2))
        self.assertEqual(third.strokes_remaining, 1)

        self.quiz.check(to_surface(VERTICAL))
        self.assertEqual(self.rec.calls[-1], ("complete", {"character": "十", "total_mistakes": 2}))

    def test_mistake_payload_carries_drawn_path(self) -> None:
        self.quiz.start(self.rec.params())
        self.quiz.check(to_surface(FAR_AWAY))
        data = self.rec.calls[0][1]
        self.assertEqual(data.character, "十")
        self.assertTrue(data.drawn_path.path_string.startswith("M "))
        self.assertGreaterEqual(len(data.drawn_path.points), 2)

    def test_backwards_stroke_rejected_by_default(self) -> None:
        self.quiz.start(self.rec.params())
        result = self.quiz.check(to_surface(list(reversed(HORIZONTAL))))
        self.assertFalse(result.is_match)
        self.assertTrue(result.meta.is_stroke_backwards)
        self.assertEqual(self.rec.kinds(), ["mistake"])
        self.assertTrue(self.rec.calls[0][1].is_backwards)
        self.assertEqual(self.quiz.state.index, 0)

    def test_backwards_stroke_accepted_when_allowed(self) -> None:
        self.quiz.start(self.rec.params(accept_backwards_strokes=True))
        result = self.quiz.check(to_surface(list(reversed(HORIZONTAL))))
        self.assertTrue(result.meta.is_stroke_backwards)
        self.assertEqual(self.rec.kinds(), ["correct"])
        self.assertEqual(self.quiz.state.index, 1)

    def test_later_stroke_drawn_first_is_a_mistake(self) -> None:
        quiz = Quiz(parse_char_data("二", TWO_BARS_JSON))
        quiz.start(self.rec.params())
        self.assertFalse(quiz.check(to_surface(LOW_HORIZONTAL)).is_match)
        self.assertTrue(quiz.check(to_surface(HORIZONTAL)).is_match)
        self.assertTrue(quiz.check(to_surface(LOW_HORIZONTAL)).is_match)
        self.assertEqual(self.rec.kinds(), ["mistake", "correct", "correct", "complete"])

    def test_empty_gesture_is_ignored(self) -> None:
        self.quiz.start(self.rec.params())
        self.assertIsNone(self.quiz.check([]))
        self.assertEqual(self.rec.calls, [])
        self.assertEqual(dict(self.quiz.state.mistakes), {})

    def test_hint_after_misses(self) -> None:
        self.quiz.start(self.rec.params())
        for _ in range(2):
            self.quiz.check(to_surface(FAR_AWAY))
        self.assertIsNone(self.quiz.hint_stroke())
        self.quiz.check(to_surface(FAR_AWAY))
        self.assertIs(self.quiz.hint_stroke(), self.cross.strokes[0])
        self.assertIsNone(self.quiz.hint_stroke(HintAfterMisses(False)))

    def test_hints_disabled(self) -> None:
        self.quiz.start(self.rec.params(show_hint_after_misses=False))
        for _ in range(5):
            self.quiz.check(to_surface(FAR_AWAY))
        self.assertIsNone(self.quiz.hint_stroke())

    def test_listeners_receive_immutable_snapshots(self) -> None:
        seen = []
        unsubscribe = self.quiz.store.subscribe(seen.append)
        self.quiz.start()
        self.quiz.check(to_surface(FAR_AWAY))
        self.assertEqual(len(seen), 2)
        self.assertEqual(dict(seen[0].mistakes), {})
        self.assertEqual(dict(seen[1].mistakes), {0: 1})
        with self.assertRaises(TypeError):
            seen[1].mistakes[0] = 5

        unsubscribe()
        self.quiz.check(to_surface(FAR_AWAY))
        self.assertEqual(len(seen), 2)

    def test_state_published_before_callbacks(self) -> None:
        indexes = []
        self.quiz.start(QuizParams(on_correct_stroke=lambda: indexes.append(self.quiz.state.index)))
        self.quiz.check(to_surface(HORIZONTAL))
        self.assertEqual(indexes, [1])

    def test_failing_handler_does_not_break_quiz(self) -> None:
        def boom(_data) -> None:
            raise RuntimeError("boom")

        events = []
        self.bus.subscribe("mistake", events.append)
        self.quiz.start(QuizParams(on_mistake=boom))
        result = self.quiz.check(to_surface(FAR_AWAY))
        self.assertFalse(result.is_match)
        self.assertEqual(dict(self.quiz.state.mistakes), {0: 1})
        self.assertEqual(len(events), 1)

    def test_bus_events(self) -> None:
        seen = []
        for name in ("mistake", "correct_stroke", "complete"):
            self.bus.subscribe(name, lambda payload, name=name: seen.append(name))
        self.quiz.start()
        self.quiz.check(to_surface(FAR_AWAY))
        self.quiz.check(to_surface(HORIZONTAL))
        self.quiz.check(to_surface(VERTICAL))
        self.assertEqual(seen, ["mistake", "correct_stroke", "correct_stroke", "complete"])

    def test_explain_traces_checks(self) -> None:
        out = io.StringIO()
        explain.enable(True)
        try:
            with redirect_stdout(out):
                self.quiz.start()
                self.quiz.check(to_surface(HORIZONTAL))
        finally:
            explain.enable(False)
        lines = out.getvalue().splitlines()
        self.assertIn('[EXPLAIN] quiz_started :: {"character":"十","index":0}', lines)
        self.assertTrue(any(line.startswith("[EXPLAIN] stroke_checked") and '"match":true' in line for line in lines))

    def test_stop_resets_state(self) -> None:
        self.quiz.start(self.rec.params())
        self.quiz.check(to_surface(FAR_AWAY))
        self.quiz.stop()
        state = self.quiz.state
        self.assertFalse(state.active)
        self.assertEqual((state.index, dict(state.mistakes), state.params), (0, {}, None))
        self.assertIsNone(self.quiz.check(to_surface(HORIZONTAL)))


class QuizParamsTests(unittest.TestCase):
    def test_from_config_with_overrides(self) -> None:
        cfg = {"quiz": {"leniency": 1.5, "accept_backwards_strokes": True, "quiz_start_stroke_num": 2}}
        params = QuizParams.from_config(cfg, leniency=None, quiz_start_stroke_num=0)
        self.assertEqual(params.leniency, 1.5)
        self.assertTrue(params.accept_backwards_strokes)
        self.assertEqual(params.quiz_start_stroke_num, 0)
        self.assertEqual(params.show_hint_after_misses, 3)


if __name__ == "__main__":
    unittest.main()
