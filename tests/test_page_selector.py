import re
import unittest

from navtabs.errors import InvalidConfigurationError
from navtabs.page_selector import (
    MATCH_ALL,
    CustomCondition,
    OptionsCondition,
    PageSelector,
    RegexCondition,
)
from navtabs.values import Computed
from navtabs.view_context import StaticViewContext


class _RecordingContext(StaticViewContext):
    def __init__(self, current: set[str]) -> None:
        super().__init__("/")
        self.current = current
        self.checked: list[object] = []

    def is_current_route(self, descriptor: object) -> bool:
        self.checked.append(descriptor)
        return descriptor in self.current


class TestPageSelector(unittest.TestCase):
    def setUp(self) -> None:
        self.context = StaticViewContext("/users/5/edit", "edit")

    def test_empty_selector_never_matches(self) -> None:
        selector = PageSelector(self.context)
        self.assertFalse(selector.is_selected("/users", "index"))
        self.assertFalse(selector.is_selected("", ""))
        self.assertEqual(len(selector), 0)
        self.assertTrue(selector)

    def test_regex_requires_at_least_one_pattern(self) -> None:
        selector = PageSelector(self.context)
        with self.assertRaises(InvalidConfigurationError):
            selector.add_regex_condition()
        with self.assertRaises(ValueError):
            selector.add_regex_condition(None, None)
        self.assertEqual(len(selector), 0)

    def test_controller_only_pattern_ignores_action(self) -> None:
        selector = PageSelector.selected_on_match(self.context, r"^/users")
        self.assertTrue(selector.is_selected("/users/5/edit", "edit"))
        self.assertTrue(selector.is_selected("/users", "anything"))
        self.assertTrue(selector.is_selected("/users", ""))
        self.assertFalse(selector.is_selected("/admin", "edit"))

    def test_both_patterns_must_match(self) -> None:
        selector = PageSelector.selected_on_match(self.context, "users", "^(show|edit)$")
        self.assertTrue(selector.is_selected("/users/5", "show"))
        self.assertFalse(selector.is_selected("/users/5", "index"))
        self.assertFalse(selector.is_selected("/admin", "show"))

    def test_action_only_pattern_matches_any_controller(self) -> None:
        selector = PageSelector(self.context)
        condition = selector.on_match(None, "^index$")
        self.assertIs(condition.controller_pattern, MATCH_ALL)
        self.assertTrue(selector.is_selected("/anything/at/all", "index"))
        self.assertFalse(selector.is_selected("/anything/at/all", "show"))

    def test_accepts_compiled_patterns(self) -> None:
        pattern = re.compile(r"reports", re.IGNORECASE)
        selector = PageSelector.selected_on_match(self.context, pattern)
        self.assertIs(selector.conditions[0].controller_pattern, pattern)
        self.assertTrue(selector.is_selected("/Reports/2024", "index"))

    def test_invalid_pattern_source_fails_at_registration(self) -> None:
        with self.assertRaises(InvalidConfigurationError):
            PageSelector.selected_on_match(self.context, "(unclosed")

    def test_missing_route_parts_are_treated_as_empty(self) -> None:
        selector = PageSelector.selected_on_match(self.context, "^$")
        self.assertTrue(selector.is_selected(None, None))  # type: ignore[arg-type]

    def test_options_condition_matches_any_descriptor(self) -> None:
        context = _RecordingContext({"/b"})
        selector = PageSelector.selected_on_options(context, "/a", "/b")
        self.assertTrue(selector.is_selected("/b", "index"))
        self.assertEqual(context.checked, ["/a", "/b"])

        context.current = set()
        self.assertFalse(selector.is_selected("/b", "index"))

    def test_options_condition_resolves_computed_descriptors_on_each_check(self) -> None:
        context = _RecordingContext({"/reports/2025"})
        year = {"value": 2024}
        selector = PageSelector.selected_on_options(
            context, Computed(lambda: f"/reports/{year['value']}")
        )
        self.assertFalse(selector.is_selected("/reports/2025", "index"))
        year["value"] = 2025
        self.assertTrue(selector.is_selected("/reports/2025", "index"))
        self.assertEqual(context.checked, ["/reports/2024", "/reports/2025"])

    def test_options_condition_requires_a_descriptor(self) -> None:
        with self.assertRaises(InvalidConfigurationError):
            PageSelector(self.context).add_options_condition()

    def test_custom_condition_receives_route(self) -> None:
        seen: list[tuple[str, str]] = []

        def predicate(controller_path: str, action: str) -> bool:
            seen.append((controller_path, action))
            return action == "edit"

        selector = PageSelector.selected_on(self.context, predicate)
        self.assertTrue(selector.is_selected("/users/5/edit", "edit"))
        self.assertFalse(selector.is_selected("/users/5", "show"))
        self.assertEqual(seen, [("/users/5/edit", "edit"), ("/users/5", "show")])

    def test_tab_scoped_condition_receives_tab(self) -> None:
        marker = object()
        selector = PageSelector.selected_on(
            self.context, lambda tab, path, action: tab is marker, tab_scoped=True
        )
        self.assertTrue(selector.is_selected("/x", "y", marker))  # type: ignore[arg-type]
        self.assertFalse(selector.is_selected("/x", "y", None))

    def test_predicate_without_route_arguments(self) -> None:
        state = {"admin": False}
        selector = PageSelector.selected_on(self.context, lambda: state["admin"], takes_route=False)
        self.assertFalse(selector.is_selected("/admin", "index"))
        state["admin"] = True
        self.assertTrue(selector.is_selected("/admin", "index"))
        self.assertFalse(selector.conditions[0].takes_route)

    def test_custom_condition_must_be_callable(self) -> None:
        with self.assertRaises(InvalidConfigurationError):
            PageSelector(self.context).add_custom_condition("nope")  # type: ignore[arg-type]

    def test_conditions_are_ored(self) -> None:
        context = _RecordingContext({"/home"})
        selector = PageSelector(context)
        selector.add_regex_condition("^/nowhere")
        selector.add_options_condition("/home")
        self.assertTrue(selector.is_selected("/home", "index"))

    def test_evaluation_stops_at_first_match(self) -> None:
        calls: list[str] = []
        selector = PageSelector(self.context)
        selector.on(lambda path, action: calls.append("first") or True)
        selector.on(lambda path, action: calls.append("second") or True)
        self.assertTrue(selector.is_selected("/", "index"))
        self.assertEqual(calls, ["first"])

    def test_condition_kinds_are_recorded_in_order(self) -> None:
        selector = PageSelector(self.context)
        selector.on_match("a")
        selector.on_options("/b")
        selector.on(lambda path, action: False)
        self.assertEqual(
            [type(condition) for condition in selector.conditions],
            [RegexCondition, OptionsCondition, CustomCondition],
        )

    def test_predicate_errors_propagate(self) -> None:
        def broken(controller_path: str, action: str) -> bool:
            raise RuntimeError("boom")

        selector = PageSelector.selected_on(self.context, broken)
        with self.assertRaises(RuntimeError):
            selector.is_selected("/", "index")


if __name__ == "__main__":
    unittest.main()
