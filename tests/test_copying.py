from flowkit.copying import deep_copy, deep_copy_map


def test_deep_copy_is_independent():
    original = {"a": [1, 2, {"b": "c"}]}
    copied = deep_copy(original)
    assert copied == original
    copied["a"][2]["b"] = "changed"
    assert original["a"][2]["b"] == "c"


def test_deep_copy_of_scalar():
    assert deep_copy("text") == "text"


def test_deep_copy_map_is_independent():
    original = {"inner": {"values": [1, 2]}}
    copied = deep_copy_map(original)
    assert copied == original
    copied["inner"]["values"].append(3)
    assert original["inner"]["values"] == [1, 2]


def test_deep_copy_map_rejects_non_mappings():
    assert deep_copy_map(None) is None
    assert deep_copy_map([("a", 1)]) is None