import pytest

from taskguard.dsl import build, category, collect, sh, target


def test_target_applies_default_cwd_to_steps_without_one():
    t = target("x", sh("a"), sh("b", cwd="other"), cwd="${SERVICE}/terraform")
    assert [s.cwd for s in t.steps] == ["${SERVICE}/terraform", "other"]
    assert t.steps[0].placeholders == ("SERVICE",)


def test_target_requires_steps_or_needs():
    with pytest.raises(ValueError):
        target("empty")
    assert target("agg", needs=["a"]).steps == ()


def test_builder_matches_functional_helper():
    built = (
        build("deploy")
        .guard("ENV")
        .depends_on("check")
        .define_step("echo ${ENV}")
        .describe("Deploy", category="Ops")
        .build()
    )
    assert built == target("deploy", sh("echo ${ENV}"), guard=["ENV"], needs=["check"], help="Deploy", category="Ops")


def test_category_keeps_explicit_labels():
    a = target("a", sh("x"))
    b = target("b", sh("y"), category="Mine")
    assert [t.category for t in category("Dev", a, b)] == ["Dev", "Mine"]


def test_collect_flattens():
    a, b, c = target("a", sh("x")), target("b", sh("y")), target("c", sh("z"))
    assert [t.name for t in collect(a, [b, c])] == ["a", "b", "c"]
