import pytest

from taskguard.dsl import category, sh, target
from taskguard.errors import TargetDefinitionError, UnknownTarget
from taskguard.registry import DEFAULT_CATEGORY, Registry


def test_duplicate_names_rejected():
    with pytest.raises(TargetDefinitionError, match="Duplicate"):
        Registry([target("a", sh("x")), target("a", sh("y"))])


def test_need_on_missing_target_rejected():
    with pytest.raises(TargetDefinitionError, match="missing target 'nope'"):
        Registry([target("a", sh("x"), needs=["nope"])])


def test_cycle_rejected():
    with pytest.raises(TargetDefinitionError, match="cycle"):
        Registry([
            target("a", sh("x"), needs=["b"]),
            target("b", sh("y"), needs=["a"]),
        ])


def test_non_target_rejected():
    with pytest.raises(TargetDefinitionError):
        Registry(["not a target"])


def test_get_unknown_target():
    reg = Registry([target("a", sh("x"))])
    with pytest.raises(UnknownTarget) as exc:
        reg.get("b")
    assert exc.value.known == ("a",)
    assert exc.value.exit_code == 2


def test_plan_puts_prerequisites_first_once():
    reg = Registry([
        target("base", sh("b")),
        target("left", sh("l"), needs=["base"]),
        target("right", sh("r"), needs=["base"]),
        target("top", sh("t"), needs=["left", "right"]),
    ])
    assert [t.name for t in reg.plan("top")] == ["base", "left", "right", "top"]
    assert [t.name for t in reg.plan("base")] == ["base"]


def test_grouped_keeps_first_seen_order():
    reg = Registry(
        category("Dev", target("clean", sh("x")))
        + [target("misc", sh("y"))]
        + category("AWS", target("aws-x", sh("z")))
    )
    groups = reg.grouped()
    assert list(groups) == ["Dev", DEFAULT_CATEGORY, "AWS"]
    assert [t.name for t in groups["Dev"]] == ["clean"]
    assert len(reg) == 3
    assert "misc" in reg
