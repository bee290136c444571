from wbless.regex_collection import RegexCollection, default_priority_function


def test_default_priority_is_zero_for_any_key():
    assert default_priority_function("anything") == default_priority_function("")


def test_match_is_case_insensitive():
    rules = RegexCollection({"firefox": "web"}, default_repr="?")
    assert rules.get("Mozilla FIREFOX") == "web"


def test_default_when_nothing_matches():
    rules = RegexCollection({"firefox": "web"}, default_repr="fallback")
    assert rules.get("terminal") == "fallback"


def test_group_substitution():
    rules = RegexCollection({r"title<(.*)>": "T $1"})
    assert rules.get("title<editor>") == "T editor"


def test_whole_match_and_dollar_escape():
    rules = RegexCollection({r"ab+": "[$&] $$"})
    assert rules.get("xabbby") == "[abbb] $"


def test_prefix_and_suffix_tokens():
    rules = RegexCollection({"mid": "$'|$`"})
    assert rules.get("leftmidright") == "right|left"


def test_higher_priority_rule_wins():
    rules = RegexCollection({"a": "short", "ab": "long"}, priority_function=len)
    assert rules.get("ab") == "long"


def test_equal_priority_keeps_insertion_order():
    rules = RegexCollection({"a": "first", "ab": "second"})
    assert rules.get("ab") == "first"


def test_non_object_mapping_gives_default():
    rules = RegexCollection(["not", "a", "dict"], default_repr="d")
    assert rules.rules == []
    assert rules.get("not") == "d"


def test_invalid_and_non_string_rules_are_skipped():
    rules = RegexCollection({"(": "broken", "x": 5, "ok": "fine"})
    assert [r.repr for r in rules.rules] == ["fine"]
    assert rules.get("ok") == "fine"


def test_match_flag_and_cache():
    rules = RegexCollection({"term": "T"}, default_repr="D")
    assert rules.get_with_match("terminal") == ("T", True)
    assert rules.get_with_match("terminal") == ("T", False)
    assert rules.get_with_match("browser") == ("D", False)
    assert rules.get("terminal") == "T"