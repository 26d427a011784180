import asyncio
import io
import sys
import unittest
from contextlib import redirect_stderr, redirect_stdout
from pathlib import Path
from unittest import mock

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from rich.console import Console  # noqa: E402
from textual.widgets import Checkbox, Input  # noqa: E402

from loancomment import comment_app  # noqa: E402
from loancomment.comment_render import CommentRenderer  # noqa: E402
from loancomment.comment_textual import CommentBuilderApp, field_caption  # noqa: E402
from loancomment.fields import FieldRegistry  # noqa: E402


class TestCommentApp(unittest.TestCase):
    def test_parse_args_defaults(self):
        args = comment_app.parse_app_args([])
        self.assertFalse(args.once)
        self.assertEqual(args.ui, "textual")

    def test_run_once_success(self):
        with redirect_stdout(io.StringIO()), redirect_stderr(io.StringIO()):
            code = comment_app.run_app(["--once", "--ui", "prompt"])
        self.assertEqual(code, 0)

    def test_prompt_commands_update_registry(self):
        renderer = CommentRenderer(FieldRegistry())
        buffer = io.StringIO()
        console = Console(file=buffer, width=120)
        commands = [
            "",
            "set loan-name Auto Loan",
            "value loan-amount 2500",
            "enable loan-amount-enabled",
            "set credit-score 700",
            "disable credit-score",
            "set nope 1",
            "enable",
            "bogus",
            "show",
            "quit",
        ]
        with mock.patch("loancomment.comment_app.Prompt.ask", side_effect=commands):
            code = comment_app.run_prompt_app(console, renderer)
        self.assertEqual(code, 0)
        registry = renderer.registry
        self.assertEqual(registry.get("loan-name").value, "Auto Loan")
        self.assertTrue(registry.is_enabled("loan-name"))
        self.assertEqual(registry.get("loan-amount").value, "2500")
        self.assertTrue(registry.is_enabled("loan-amount"))
        self.assertEqual(registry.get("credit-score").value, "700")
        self.assertFalse(registry.is_enabled("credit-score"))
        output = buffer.getvalue()
        self.assertIn("Unknown field: nope", output)
        self.assertIn("Usage: enable <key>", output)
        self.assertIn("Unknown command: bogus", output)
        self.assertIn("Loan Amount: $2500.00", output)

    def test_prompt_reset(self):
        renderer = CommentRenderer(FieldRegistry())
        console = Console(file=io.StringIO(), width=120)
        with mock.patch("loancomment.comment_app.Prompt.ask", side_effect=["set loan-term 36", "reset", "exit"]):
            comment_app.run_prompt_app(console, renderer)
        self.assertEqual(renderer.render(), "")

    def test_textual_unavailable_returns_error(self):
        renderer = CommentRenderer(FieldRegistry())
        with mock.patch.dict(sys.modules, {"loancomment.comment_textual": None}):
            with redirect_stderr(io.StringIO()) as err:
                code = comment_app.run_textual_app(renderer)
        self.assertEqual(code, 1)
        self.assertIn("textual UI is unavailable", err.getvalue())


class TestCommentBuilderTextual(unittest.TestCase):
    def test_field_caption(self):
        registry = FieldRegistry()
        self.assertEqual(field_caption(registry.get("loan-name")), "Loan Name")
        self.assertEqual(field_caption(registry.get("written-rec")), "Written Rec")

    def test_input_and_checkbox_events_regenerate_comment(self):
        async def _run() -> None:
            app = CommentBuilderApp(CommentRenderer(FieldRegistry()))
            async with app.run_test() as pilot:
                await pilot.pause()
                self.assertEqual(app.comment_text, "")
                app.query_one("#loan-name-value", Input).value = "Auto Loan"
                await pilot.pause()
                self.assertEqual(app.comment_text, "")
                app.query_one("#loan-name-enabled", Checkbox).value = True
                await pilot.pause()
                self.assertIn("Loan Name: Auto Loan\n", app.comment_text)
                self.assertTrue(app.registry.is_enabled("loan-name"))

                app.action_reset_fields()
                await pilot.pause()
                self.assertEqual(app.comment_text, "")
                self.assertFalse(app.registry.is_enabled("loan-name"))

        asyncio.run(_run())


if __name__ == "__main__":
    unittest.main()
