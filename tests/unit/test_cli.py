"""
Tests for the lesson-cart command-line client.
"""

import json

import pandas as pd
import pytest

from lesson_cart.cli import main, parse_arguments


ORDER_ARGS = ["order", "--lesson", "L1", "--name", "Ann Lee", "--phone", "5551234"]


class TestParseArguments:

    def test_command_required(self):
        with pytest.raises(SystemExit):
            parse_arguments([])

    def test_order_lessons_repeatable(self):
        args = parse_arguments(ORDER_ARGS + ["--lesson", "L2", "--dry-run"])

        assert args.lessons == ["L1", "L2"]
        assert args.dry_run

    def test_sort_choices(self):
        with pytest.raises(SystemExit):
            parse_arguments(["lessons", "--sort", "colour"])


class TestListing:

    def test_lessons_sorted_and_exported(self, fake_api, tmp_path, capsys):
        export = tmp_path / "lessons.csv"

        code = main(["lessons", "--sort", "price", "--desc", "--export", str(export)], api=fake_api)

        assert code == 0
        out = capsys.readouterr().out
        assert out.index("Art") < out.index("Math") < out.index("Music")
        assert "3 lessons" in out
        assert list(pd.read_csv(export)["_id"]) == ["L2", "L1", "L3"]
        assert fake_api.closed

    def test_search(self, fake_api, lessons, capsys):
        fake_api.search_results["art"] = [lessons[1]]

        code = main(["search", "art"], api=fake_api)

        assert code == 0
        assert "1 lessons" in capsys.readouterr().out
        assert fake_api.calls_to("search_lessons") == [("search_lessons", "art")]

    def test_no_results(self, fake_api, capsys):
        assert main(["search", "chess"], api=fake_api) == 0
        assert "No lessons found." in capsys.readouterr().out

    def test_lessons_backend_failure(self, fake_api, capsys):
        fake_api.fail_lessons = True

        assert main(["lessons"], api=fake_api) == 1
        out = capsys.readouterr().out
        assert "Could not retrieve lessons" in out
        assert "No lessons found." not in out

    def test_search_backend_failure(self, fake_api, capsys):
        fake_api.fail_search = True

        assert main(["search", "art"], api=fake_api) == 1
        assert "Could not retrieve lessons" in capsys.readouterr().out


class TestOrder:

    def test_order_placed_and_reported(self, fake_api, tmp_path, capsys):
        code = main(ORDER_ARGS + ["--report-dir", str(tmp_path)], api=fake_api)

        assert code == 0
        assert "Your order has been placed!" in capsys.readouterr().out
        assert fake_api.calls_to("update_lesson_space") == [("update_lesson_space", "L1", 3)]

        reports = list(tmp_path.glob("order_report_*.json"))
        assert len(reports) == 1
        report = json.loads(reports[0].read_text(encoding="utf-8"))
        assert report["outcome"]["status"] == "success"
        assert report["lessons"][0]["_id"] == "L1"
        assert len(list(tmp_path.glob("order_items_*.csv"))) == 1

    def test_dry_run_sends_nothing(self, fake_api, capsys):
        code = main(ORDER_ARGS + ["--dry-run"], api=fake_api)

        assert code == 0
        assert "DRY RUN" in capsys.readouterr().out
        assert fake_api.calls_to("create_order") == []

    def test_invalid_phone(self, fake_api, capsys):
        args = ["order", "--lesson", "L1", "--name", "Ann Lee", "--phone", "555-1234"]

        assert main(args, api=fake_api) == 1
        assert "Phone must contain digits only" in capsys.readouterr().out
        assert fake_api.calls_to("create_order") == []

    def test_invalid_payment(self, fake_api, capsys):
        code = main(ORDER_ARGS + ["--card", "4111", "--expiry", "12/27", "--cvc", "123"], api=fake_api)

        assert code == 1
        assert "card_number" in capsys.readouterr().out

    def test_partial_payment_is_validated(self, fake_api, capsys):
        code = main(ORDER_ARGS + ["--expiry", "12/27"], api=fake_api)

        assert code == 1
        out = capsys.readouterr().out
        assert "card_number" in out
        assert fake_api.calls_to("create_order") == []

    def test_valid_payment_accepted(self, fake_api, tmp_path):
        payment = ["--card", "4111 1111 1111 1111", "--expiry", "12/27", "--cvc", "123"]

        code = main(ORDER_ARGS + payment + ["--report-dir", str(tmp_path)], api=fake_api)

        assert code == 0

    def test_unknown_lesson(self, fake_api, capsys):
        args = ["order", "--lesson", "L9", "--name", "Ann Lee", "--phone", "5551234"]

        assert main(args, api=fake_api) == 1
        assert "Unknown lesson: L9" in capsys.readouterr().out

    def test_full_lesson(self, fake_api, capsys):
        args = ["order", "--lesson", "L3", "--name", "Ann Lee", "--phone", "5551234"]

        assert main(args, api=fake_api) == 1
        assert "No space left" in capsys.readouterr().out

    def test_backend_failure(self, fake_api, tmp_path, capsys):
        fake_api.fail_order = True

        code = main(ORDER_ARGS + ["--report-dir", str(tmp_path)], api=fake_api)

        assert code == 1
        assert "Checkout failed" in capsys.readouterr().out
        assert len(list(tmp_path.glob("order_report_*.json"))) == 1

    def test_lessons_unavailable(self, fake_api, capsys):
        fake_api.fail_lessons = True

        assert main(ORDER_ARGS, api=fake_api) == 1
        assert "Could not retrieve lessons" in capsys.readouterr().out
        assert fake_api.calls_to("create_order") == []
