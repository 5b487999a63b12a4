from __future__ import annotations

from typing import TYPE_CHECKING, Any

from jinja2 import StrictUndefined, TemplateError
from jinja2.sandbox import SandboxedEnvironment
from markupsafe import Markup

from .errors import InvalidConfigurationError

if TYPE_CHECKING:
    from .builder import MenuBuilder


DEFAULT_MENU_TEMPLATE = """<ul class="{{ menu_class }}">
{% for tab in tabs %}
  <li{% if tab.is_selected() %} class="is-active"{% endif %}>{{ tab.render() }}</li>
{% endfor %}
</ul>"""


def _template_environment() -> SandboxedEnvironment:
    return SandboxedEnvironment(
        autoescape=True,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=False,
        undefined=StrictUndefined,
    )


def _normalize_template_text(template_text: str) -> str:
    return template_text.replace("\r\n", "\n").strip("\n")


def validate_menu_template(template_text: str) -> dict[str, Any]:
    env = _template_environment()
    errors: list[str] = []
    if not _normalize_template_text(template_text or ""):
        errors.append("Menu template must not be empty.")
    else:
        try:
            env.parse(_normalize_template_text(template_text))
        except TemplateError as exc:
            errors.append(str(exc))
    return {
        "valid": not errors,
        "errors": errors,
    }


def render_menu(
    builder: MenuBuilder,
    template_text: str | None = None,
    *,
    menu_class: str = "tabs",
) -> Markup:
    """Render the builder's visible tabs through a sandboxed template.

    The template sees ``tabs`` (visible tabs, in order), ``all_tabs`` and
    ``menu_class``.
    """
    text = template_text if template_text is not None else DEFAULT_MENU_TEMPLATE
    validation = validate_menu_template(text)
    if not validation["valid"]:
        raise InvalidConfigurationError("Invalid menu template: " + "; ".join(validation["errors"]))

    env = _template_environment()
    try:
        template = env.from_string(_normalize_template_text(text))
        rendered = template.render(
            tabs=builder.visible_tabs(),
            all_tabs=builder.all_tabs(),
            menu_class=menu_class,
        )
    except TemplateError as exc:
        raise InvalidConfigurationError(f"Menu template failed to render: {exc}") from exc
    return Markup(rendered)
