from pseudo_styles import StyleRegistry, pseudo_style_ids, update_pseudo_class_styles

HOVER = {"fg": "#0078D4"}
FOCUS = {"highlightcolor": "#0078D4"}


def test_ids_are_unique_per_picker() -> None:
    a = pseudo_style_ids()
    b = pseudo_style_ids()
    assert a.wrapper != b.wrapper
    assert a.wrapper.startswith("wrapper-style-id")
    assert len(set(a.all())) == 3


def test_register_lookup_unregister() -> None:
    registry = StyleRegistry()
    registry.register_hover_style("x", {"fg": "red"})
    registry.register_hover_style("x", {"outline": 1}, pseudo_class="focus")
    assert registry.lookup("x") == {"fg": "red"}
    assert registry.lookup("x", "focus") == {"outline": 1}
    registry.unregister("x")
    assert len(registry) == 0
    assert registry.lookup("x") == {}
    # Unknown ids are ignored
    registry.unregister("missing")


def test_lookup_returns_a_copy() -> None:
    registry = StyleRegistry()
    registry.register_hover_style("x", {"fg": "red"})
    registry.lookup("x")["fg"] = "blue"
    assert registry.lookup("x") == {"fg": "red"}


def test_focus_style_suppressed_for_touch_and_click() -> None:
    registry = StyleRegistry()
    ids = pseudo_style_ids()
    update_pseudo_class_styles(registry, ids, HOVER, HOVER, FOCUS, True)
    assert registry.lookup(ids.prev_month_nav) == HOVER
    assert registry.lookup(ids.next_month_nav) == HOVER
    assert registry.lookup(ids.wrapper, "focus") == {}

    update_pseudo_class_styles(registry, ids, HOVER, HOVER, FOCUS, False)
    assert registry.lookup(ids.wrapper, "focus") == FOCUS
    assert len(registry) == 3

    registry.unregister_all(ids.all())
    assert len(registry) == 0
