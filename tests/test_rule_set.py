import pytest

from learnkit.decision_tree import DecisionTree
from learnkit.rule_set import Rule, RuleSet


@pytest.fixture
def tree():
    model = DecisionTree()
    model.fit([[0, 0], [0, 1], [1, 0], [1, 1]], [1, 1, 0, 0], 2)
    return model


def test_rules_are_generated(tree):
    rules = RuleSet(tree).rules()
    assert len(rules) == 2
    assert set(rules) == {
        "IF feature[0] == 0 THEN class is 1",
        "IF feature[0] == 1 THEN class is 0",
    }


def test_predictions(tree):
    ruleset = RuleSet(tree)
    assert ruleset.predict([0, 0]) == 1
    assert ruleset.predict([1, 1]) == 0
    assert ruleset.predict([0, 1]) == 1


def test_no_rule_match(tree):
    assert RuleSet(tree).predict([2, 0]) == -1


def test_untrained_tree_gives_no_rules():
    ruleset = RuleSet(DecisionTree())
    assert ruleset.rules() == []
    assert ruleset.predict([0, 0]) == -1


def test_rule_matching_and_text():
    rule = Rule({1: 3, 0: 2}, 5)
    assert rule.matches([2, 3])
    assert not rule.matches([2, 4])
    assert not rule.matches([2])
    assert str(rule) == "IF feature[0] == 2 AND feature[1] == 3 THEN class is 5"