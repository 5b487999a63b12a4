import logging
import unittest

from flask import Flask, render_template_string

from navtabs.builder import MenuBuilder
from navtabs.config import MenuSettings
from navtabs.errors import InvalidConfigurationError
from navtabs.flask_ext import EXTENSION_KEY, NavTabs
from navtabs.view_context import FlaskViewContext


def _build_app(settings: MenuSettings | None = None) -> tuple[Flask, NavTabs]:
    app = Flask(__name__)
    navtabs = NavTabs(app, settings=settings or MenuSettings())

    @app.get("/")
    def home() -> str:
        return "home"

    @app.get("/users/<int:user_id>/edit")
    def edit_user(user_id: int) -> str:
        return "edit"

    @app.get("/menu")
    def menu_page() -> str:
        return render_template_string(
            "{% set menu = navtabs_menu() %}"
            "{% set _ = menu.add_tab_selected_on_options('Home', {'endpoint': 'home'}) %}"
            "{% set _ = menu.add_tab_selected_on_match('Menu', '/menu', '^/menu') %}"
            "{{ render_menu(menu) }}"
        )

    return app, navtabs


class TestNavTabsExtension(unittest.TestCase):
    def setUp(self) -> None:
        self._navtabs_level = logging.getLogger("navtabs").level

    def tearDown(self) -> None:
        logging.getLogger("navtabs").setLevel(self._navtabs_level)

    def test_registers_extension(self) -> None:
        app, navtabs = _build_app()
        self.assertIs(app.extensions[EXTENSION_KEY], navtabs)
        self.assertIsInstance(navtabs.view_context, FlaskViewContext)

    def test_sets_library_log_level(self) -> None:
        _build_app(MenuSettings(log_level="DEBUG"))
        self.assertEqual(logging.getLogger("navtabs").level, logging.DEBUG)

    def test_init_app_validates_settings(self) -> None:
        with self.assertRaises(InvalidConfigurationError):
            NavTabs(Flask(__name__), settings=MenuSettings(renderer="button"))

    def test_menu_requires_init_app(self) -> None:
        with self.assertRaises(RuntimeError):
            NavTabs().menu()

    def test_menu_from_view_code(self) -> None:
        app, navtabs = _build_app(MenuSettings(tab_class="nav"))
        with app.test_request_context("/users/5/edit"):
            menu = navtabs.menu()
            self.assertIsInstance(menu, MenuBuilder)
            users = menu.add_tab_selected_on_match("Users", "/users", r"^/users")
            home = menu.add_tab_selected_on_options("Home", {"endpoint": "home"})
            self.assertTrue(users.is_selected())
            self.assertFalse(home.is_selected())
            self.assertEqual(
                str(users.render()),
                '<a href="/users" class="tab is-active" aria-current="page">Users</a>',
            )
            self.assertEqual(str(home.render()), '<a href="/" class="nav">Home</a>')

    def test_selection_follows_each_request(self) -> None:
        app, navtabs = _build_app()
        with app.test_request_context("/"):
            menu = navtabs.menu()
            home = menu.add_tab_selected_on_options("Home", {"endpoint": "home"})
            self.assertTrue(home.is_selected())
        with app.test_request_context("/users/1/edit"):
            self.assertFalse(home.is_selected())

    def test_template_helpers(self) -> None:
        app, _ = _build_app()
        response = app.test_client().get("/menu")
        self.assertEqual(response.status_code, 200)
        body = response.get_data(as_text=True)
        self.assertIn('<ul class="tabs">', body)
        self.assertIn('<li><a href="/" class="tab">Home</a></li>', body)
        self.assertIn(
            '<li class="is-active"><a href="/menu" class="tab is-active" aria-current="page">Menu</a></li>',
            body,
        )


if __name__ == "__main__":
    unittest.main()
