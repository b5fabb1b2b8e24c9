import pytest

from taskguard.errors import UnresolvedPlaceholder
from taskguard.template import StepTemplate, placeholders_in, render


def test_render_substitutes_placeholder():
    assert render("deploy ${ENV}", {"ENV": "prod"}) == "deploy prod"


def test_render_unset_placeholder_raises():
    with pytest.raises(UnresolvedPlaceholder) as exc:
        render("deploy ${ENV}", {})
    assert exc.value.name == "ENV"
    assert "deploy ${ENV}" in str(exc.value)


def test_render_empty_value_is_allowed():
    assert render("a${X}b", {"X": ""}) == "ab"


def test_shell_syntax_is_left_alone():
    text = 'echo $HOME "$(pwd)" ${NAME}'
    assert render(text, {"NAME": "n"}) == 'echo $HOME "$(pwd)" n'


def test_placeholders_in_order_without_duplicates():
    assert placeholders_in("${B} ${A} ${B}") == ("B", "A")
    assert placeholders_in(None) == ()


def test_step_template_collects_cwd_and_command_placeholders():
    step = StepTemplate("terraform plan -var-file=tfvars/${ENV}.tfvars", cwd="${SERVICE}/terraform")
    assert step.placeholders == ("SERVICE", "ENV")
    assert step.missing({"SERVICE": "foo"}) == ("ENV",)
    assert step.render({"SERVICE": "foo", "ENV": "dev"}) == (
        "terraform plan -var-file=tfvars/dev.tfvars",
        "foo/terraform",
    )


def test_step_template_without_cwd_renders_none():
    assert StepTemplate("ls").render({}) == ("ls", None)
