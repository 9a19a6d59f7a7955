from core.plugins import find_plugin_for, load_plugins


def test_all_topics_load():
    plugins = load_plugins()
    assert {p.category for p in plugins} == {
        "Derivative", "Integral", "Implicit Differentiation", "Limit", "Partial Derivative",
    }


def test_routing_follows_the_classifier():
    plugins = load_plugins()
    assert find_plugin_for("d/dx(x^2)", plugins).category == "Derivative"
    assert find_plugin_for("integral(sin(x))", plugins).category == "Integral"
    assert find_plugin_for("x^2 + 3x + 2", plugins) is None


def test_preferred_topic_by_tag():
    plugins = load_plugins()
    assert find_plugin_for("x^2", plugins, preferred_topic="integration").category == "Integral"
    assert find_plugin_for("d/dx(x^2)", plugins, preferred_topic="Auto-detect").category == "Derivative"


def test_missing_package():
    assert load_plugins("no_such_topics_package") == []
